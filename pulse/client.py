"""
HTTP client for the Pulse API plus the dashboard state that sits on top of it.

``PulseClient`` is a thin wrapper over ``requests``: one method per endpoint,
errors turned into ``PulseClientError``. ``DashboardState`` keeps what the
creator dashboard holds in memory (filters, tab, page, fetched messages) and
refetches after every successful write. ``SupportForm`` is the
report-an-issue form.
"""
import logging
import os
from dataclasses import dataclass, field
from datetime import datetime

import requests

from pulse.services import dashboard

log = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10


class PulseClientError(Exception):
    """A call failed; ``str(err)`` is safe to show to the creator."""

    def __init__(self, message: str, status: int | None = None, detail: str | None = None):
        super().__init__(message)
        self.status = status
        self.detail = detail


def _payload(resp) -> dict:
    try:
        data = resp.json()
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}


class PulseClient:
    def __init__(self, base_url: str | None = None, session=None, timeout: float = DEFAULT_TIMEOUT):
        self.base_url = (base_url or os.getenv("PULSE_API_URL") or "http://localhost:5000").rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout
        self.csrf_token: str | None = None

    def _request(self, method: str, path: str, failure: str, params=None, json=None) -> dict:
        headers = {"Accept": "application/json"}
        if method != "GET" and self.csrf_token:
            headers["X-CSRFToken"] = self.csrf_token
        try:
            resp = self.session.request(
                method,
                f"{self.base_url}{path}",
                params=params,
                json=json,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            log.error("%s %s: %s", method, path, exc)
            raise PulseClientError(failure, detail=str(exc)) from exc

        payload = _payload(resp)
        if not resp.ok:
            detail = payload.get("error")
            log.error("%s %s -> %s %s", method, path, resp.status_code, detail or "")
            raise PulseClientError(failure, status=resp.status_code, detail=detail)
        return payload

    # --- session ---

    def fetch_csrf(self) -> str:
        self.csrf_token = self._request("GET", "/auth/csrf", "Failed to start session").get("csrf_token")
        return self.csrf_token

    def login(self, email: str, password: str) -> dict:
        if self.csrf_token is None:
            self.fetch_csrf()
        return self._request("POST", "/auth/login", "Failed to sign in", json={"email": email, "password": password})["user"]

    def logout(self) -> None:
        self._request("POST", "/auth/logout", "Failed to sign out")

    # --- messages ---

    def list_messages(self, creator_id: str | None = None, tag: str = "all", product_category: str = "all") -> list[dict]:
        params = {}
        if creator_id:
            params["creatorId"] = creator_id
        if tag and tag != "all":
            params["tag"] = tag
        if product_category and product_category != "all":
            params["productCategory"] = product_category
        return self._request("GET", "/api/feedback", "Failed to fetch messages", params=params).get("data") or []

    def reaction_count(self, message_id: str) -> int:
        payload = self._request(
            "GET",
            "/api/reactions",
            "Failed to fetch reactions",
            params={"messageId": message_id, "userHash": "count_only"},
        )
        return len(payload.get("data") or [])

    def mark_reviewed(self, message_id: str, reviewed: bool) -> dict:
        return self._request("PATCH", f"/api/feedback/{message_id}", "Failed to update message", json={"reviewed": reviewed})["data"]

    def delete_message(self, message_id: str) -> None:
        self._request("DELETE", f"/api/feedback/{message_id}", "Failed to delete message")

    def reply(self, message_id: str, reply_text: str, is_public: bool) -> dict:
        body = {"messageId": message_id, "replyText": reply_text, "isPublic": is_public}
        return self._request("POST", "/api/replies", "Failed to submit reply", json=body)["data"]

    def set_reply_visibility(self, reply_id: str, is_public: bool) -> dict:
        return self._request("PATCH", f"/api/replies/{reply_id}", "Failed to update reply visibility", json={"isPublic": is_public})["data"]

    def submit_creator_feedback(self, category: str, message: str, subject: str | None = None) -> dict:
        body = {"category": category, "message": message}
        if subject:
            body["subject"] = subject
        try:
            return self._request("POST", "/api/creator-feedback", "Failed to submit feedback", json=body)["data"]
        except PulseClientError as err:
            # the server's reason is what the form shows
            if err.detail:
                raise PulseClientError(err.detail, status=err.status, detail=err.detail) from err
            raise


@dataclass
class DashboardState:
    """
    In-memory dashboard: two fetched lists (filtered messages, and every
    message with its reaction count for hot posts) plus UI selections.
    """
    client: PulseClient
    creator_id: str
    creator_slug: str
    origin: str = ""
    tab: str = dashboard.TAB_OVERVIEW
    tag_filter: str = "all"
    category_filter: str = "all"
    page: int = 1
    per_page: int = dashboard.MESSAGES_PER_PAGE
    messages: list = field(default_factory=list)
    all_messages: list = field(default_factory=list)
    is_loading: bool = False
    expanded: set = field(default_factory=set)
    open_dropdown: str | None = None

    def refresh(self) -> None:
        """
        Reload both lists. A failed load is logged and leaves the previous
        lists in place; it is not raised. A failed reaction count counts as 0.
        """
        self.is_loading = True
        try:
            try:
                filtered = self.client.list_messages(self.creator_id, self.tag_filter, self.category_filter)
                everything = self.client.list_messages(self.creator_id)
            except PulseClientError as err:
                log.error("Error fetching messages: %s", err.detail or err)
                return

            for m in everything:
                try:
                    m["reaction_count"] = self.client.reaction_count(m["id"])
                except PulseClientError as err:
                    log.error("Error fetching reactions for %s: %s", m["id"], err.detail or err)
                    m["reaction_count"] = 0
            self.messages = filtered
            self.all_messages = dashboard.rank_hot(everything)
        finally:
            self.is_loading = False

    # --- selections ---

    def set_tab(self, tab: str) -> None:
        if tab not in dashboard.TABS:
            raise ValueError(f"Unknown tab: {tab!r}")
        self.tab = tab
        self.page = 1

    def set_filters(self, tag: str | None = None, category: str | None = None) -> None:
        if tag is not None:
            self.tag_filter = tag
        if category is not None:
            self.category_filter = category
        self.refresh()

    def go_to_page(self, page: int) -> None:
        total_pages = max(self.view()["pagination"]["total_pages"], 1)
        self.page = min(max(1, page), total_pages)

    def next_page(self) -> None:
        self.go_to_page(self.page + 1)

    def prev_page(self) -> None:
        self.go_to_page(self.page - 1)

    def toggle_expanded(self, message_id: str) -> None:
        if message_id in self.expanded:
            self.expanded.discard(message_id)
        else:
            self.expanded.add(message_id)

    def toggle_dropdown(self, message_id: str) -> None:
        self.open_dropdown = None if self.open_dropdown == message_id else message_id

    @property
    def share_link(self) -> str:
        return f"{self.origin.rstrip('/')}/p/{self.creator_slug}"

    def view(self, now: datetime | None = None) -> dict:
        return dashboard.build_overview(
            self.messages,
            tab=self.tab,
            page=self.page,
            now=now,
            hot_source=self.all_messages,
            per_page=self.per_page,
        )

    # --- row actions: write, then refetch on success ---

    def _then_refresh(self, call, *args):
        self.open_dropdown = None
        result = call(*args)
        self.refresh()
        return result

    def mark_reviewed(self, message_id: str, reviewed: bool):
        return self._then_refresh(self.client.mark_reviewed, message_id, reviewed)

    def delete_message(self, message_id: str):
        self.expanded.discard(message_id)
        return self._then_refresh(self.client.delete_message, message_id)

    def reply(self, message_id: str, reply_text: str, is_public: bool):
        return self._then_refresh(self.client.reply, message_id, reply_text, is_public)

    def set_reply_visibility(self, reply_id: str, is_public: bool):
        return self._then_refresh(self.client.set_reply_visibility, reply_id, is_public)


SUPPORT_CATEGORIES = (
    {"value": "bug", "label": "🐛 Bug or Issue", "helper": "Something is broken or not working as expected"},
    {"value": "feedback", "label": "💡 Feedback", "helper": "Share thoughts on the experience or workflow"},
    {"value": "idea", "label": "🚀 Idea", "helper": "Suggest improvements or features for Pulse"},
    {"value": "other", "label": "📝 Other", "helper": "Anything else you want to pass along"},
)

SUPPORT_EMPTY_MESSAGE = "Please add some details so we can help effectively."
SUPPORT_SUCCESS = "Thanks! Your note is on its way to the Pulse team."
SUPPORT_FALLBACK_ERROR = "Something went wrong. Please try again."


@dataclass
class SupportForm:
    category: str = "bug"
    subject: str = ""
    message: str = ""
    is_open: bool = False
    submitting: bool = False
    success: str | None = None
    error: str | None = None

    def reset(self) -> None:
        self.category = "bug"
        self.subject = ""
        self.message = ""
        self.success = None
        self.error = None

    def open(self) -> None:
        self.reset()
        self.is_open = True

    def close(self) -> None:
        self.is_open = False

    def submit(self, client: PulseClient) -> bool:
        if not self.message.strip():
            self.error = SUPPORT_EMPTY_MESSAGE
            return False

        self.submitting = True
        self.error = None
        try:
            client.submit_creator_feedback(
                self.category,
                self.message.strip(),
                subject=self.subject.strip() or None,
            )
        except PulseClientError as err:
            log.error("Error submitting creator feedback: %s", err)
            self.error = str(err) or SUPPORT_FALLBACK_ERROR
            return False
        finally:
            self.submitting = False

        self.success = SUPPORT_SUCCESS
        self.subject = ""
        self.message = ""
        return True
