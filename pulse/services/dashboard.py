"""
Dashboard view-model.

Everything here is a pure function over serialized messages (the dicts
returned by ``GET /api/feedback``), so the server-side overview endpoint and
``PulseClient`` derive exactly the same numbers. Time-dependent helpers
take an optional ``now`` and fall back to the current UTC time.

A message dict is expected to carry ``id``, ``created_at`` (ISO string or
datetime), ``reviewed``, ``reply`` (list) and, for hot posts,
``reaction_count``.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Iterable

from pulse.utils.helpers import as_utc, utcnow

MESSAGES_PER_PAGE = 10
HOT_POST_THRESHOLD = 5
HOT_POST_LIMIT = 4

THIS_WEEK = timedelta(days=7)
NEEDS_ATTENTION_AGE = timedelta(days=3)
NEW_POST_AGE = timedelta(hours=24)

TAB_OVERVIEW = "overview"
TAB_INBOX = "inbox"
TAB_REVIEWED = "reviewed"
TABS = (TAB_OVERVIEW, TAB_INBOX, TAB_REVIEWED)

TAG_LABELS = {
    "question": "❓ Question",
    "feedback": "💬 Feedback",
    "confession": "🤫 Confession",
}

PRODUCT_CATEGORY_LABELS = {
    "main_product": "🚀 Product",
    "service": "⚡ Service",
    "feature_request": "🎁 Feature",
    "bug_report": "🐛 Bug",
    "other": "📝 Other",
}

EMPTY_STATE = {
    TAB_OVERVIEW: "Share your link to start receiving anonymous messages",
    TAB_INBOX: "All caught up! No new messages to review.",
    TAB_REVIEWED: "No reviewed messages yet.",
}

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

Message = dict[str, Any]


def tag_label(tag: str | None) -> str | None:
    if not tag:
        return None
    return TAG_LABELS.get(tag, tag)


def category_label(category: str | None) -> str | None:
    if not category:
        return None
    return PRODUCT_CATEGORY_LABELS.get(category, category)


def _created(m: Message) -> datetime:
    return as_utc(m.get("created_at")) or _EPOCH


def has_reply(m: Message) -> bool:
    replies = m.get("reply")
    return isinstance(replies, list) and len(replies) > 0


def is_inbox(m: Message) -> bool:
    """Not handled yet: no reply, whether or not it was marked reviewed."""
    return not has_reply(m)


def is_reviewed(m: Message) -> bool:
    return has_reply(m) or bool(m.get("reviewed"))


def is_pending(m: Message) -> bool:
    return not m.get("reviewed") and not has_reply(m)


def needs_attention(messages: Iterable[Message], now: datetime | None = None) -> list[Message]:
    """Unreplied, unreviewed messages older than three days."""
    now = as_utc(now) or utcnow()
    cutoff = now - NEEDS_ATTENTION_AGE
    return [m for m in messages if not has_reply(m) and not m.get("reviewed") and _created(m) < cutoff]


def compute_metrics(messages: list[Message], now: datetime | None = None) -> dict[str, int]:
    now = as_utc(now) or utcnow()
    week_ago = now - THIS_WEEK
    return {
        "total": len(messages),
        "this_week": sum(1 for m in messages if _created(m) >= week_ago),
        "pending": sum(1 for m in messages if is_pending(m)),
        "replied": sum(1 for m in messages if has_reply(m)),
    }


def filter_by_tab(messages: list[Message], tab: str) -> list[Message]:
    if tab == TAB_OVERVIEW:
        return list(messages)
    if tab == TAB_INBOX:
        return [m for m in messages if is_inbox(m)]
    if tab == TAB_REVIEWED:
        return [m for m in messages if is_reviewed(m)]
    raise ValueError(f"Unknown tab: {tab!r}")


@dataclass
class Page:
    items: list[Message]
    page: int
    per_page: int
    total: int
    total_pages: int
    window: list[int | None] = field(default_factory=list)

    @property
    def start(self) -> int:
        """1-based index of the first item shown ("Showing <start> to <end>")."""
        return 0 if self.total == 0 else (self.page - 1) * self.per_page + 1

    @property
    def end(self) -> int:
        return min(self.page * self.per_page, self.total)

    @property
    def has_prev(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    def to_dict(self) -> dict[str, Any]:
        return {
            "page": self.page,
            "per_page": self.per_page,
            "total": self.total,
            "total_pages": self.total_pages,
            "start": self.start,
            "end": self.end,
            "has_prev": self.has_prev,
            "has_next": self.has_next,
            "window": self.window,
        }


def page_window(page: int, total_pages: int) -> list[int | None]:
    """
    Page buttons to render: first, last, current and its neighbours.
    ``None`` stands for an ellipsis, emitted at most once on each side
    (in the slot of page 2 and of page total_pages - 1).
    """
    out: list[int | None] = []
    for p in range(1, total_pages + 1):
        show = p == 1 or p == total_pages or (page - 1 <= p <= page + 1)
        if show:
            out.append(p)
        elif p == 2 or p == total_pages - 1:
            out.append(None)
    return out


def paginate(items: list[Message], page: int = 1, per_page: int = MESSAGES_PER_PAGE) -> Page:
    if per_page < 1:
        raise ValueError("per_page must be positive")
    total = len(items)
    total_pages = math.ceil(total / per_page)
    page = min(max(1, page), max(total_pages, 1))
    offset = (page - 1) * per_page
    return Page(
        items=items[offset:offset + per_page],
        page=page,
        per_page=per_page,
        total=total,
        total_pages=total_pages,
        window=page_window(page, total_pages),
    )


def rank_hot(messages: Iterable[Message]) -> list[Message]:
    """Most reactions first; ties go to the newer message. Stable otherwise."""
    ranked = sorted(messages, key=_created, reverse=True)
    return sorted(ranked, key=lambda m: m.get("reaction_count") or 0, reverse=True)


def hot_posts(
    messages: Iterable[Message],
    now: datetime | None = None,
    threshold: int = HOT_POST_THRESHOLD,
    limit: int = HOT_POST_LIMIT,
) -> list[Message]:
    now = as_utc(now) or utcnow()
    hot = [m for m in rank_hot(messages) if (m.get("reaction_count") or 0) >= threshold]
    out = []
    for m in hot[:limit]:
        out.append({
            **m,
            "is_new": now - _created(m) < NEW_POST_AGE,
            "has_reply": has_reply(m),
        })
    return out


def decorate(m: Message) -> Message:
    """Attach display labels and the first reply, the way a row renders it."""
    replies = m.get("reply") or []
    return {
        **m,
        "tag_label": tag_label(m.get("tag")),
        "category_label": category_label(m.get("product_category")),
        "has_reply": bool(replies),
        "first_reply": replies[0] if replies else None,
    }


def build_overview(
    messages: list[Message],
    tab: str = TAB_OVERVIEW,
    page: int = 1,
    now: datetime | None = None,
    hot_source: list[Message] | None = None,
    per_page: int = MESSAGES_PER_PAGE,
    hot_threshold: int = HOT_POST_THRESHOLD,
) -> dict[str, Any]:
    """
    Everything the dashboard shows at once.

    ``messages`` is the (possibly tag/category filtered) list; metrics and
    tabs are computed on it. ``hot_source`` is the unfiltered list with
    reaction counts; it defaults to ``messages``.
    """
    now = as_utc(now) or utcnow()
    listed = filter_by_tab(messages, tab)
    pg = paginate(listed, page=page, per_page=per_page)
    attention = needs_attention(messages, now)
    return {
        "tab": tab,
        "metrics": compute_metrics(messages, now),
        "counts": {
            TAB_OVERVIEW: len(messages),
            TAB_INBOX: sum(1 for m in messages if is_inbox(m)),
            TAB_REVIEWED: sum(1 for m in messages if is_reviewed(m)),
        },
        "needs_attention": len(attention),
        "hot_posts": hot_posts(hot_source if hot_source is not None else messages, now, threshold=hot_threshold),
        "messages": [decorate(m) for m in pg.items],
        "pagination": pg.to_dict(),
        "empty_state": EMPTY_STATE[tab] if not listed else None,
    }
