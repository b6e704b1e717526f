"""
Query helpers for the message inbox. Routes and the CLI go through these
so ownership scoping lives in one place.
"""
from sqlalchemy import func
from sqlalchemy.orm import selectinload
from pulse.extensions import db
from pulse.models.message import Message, TAG_CHOICES, PRODUCT_CATEGORY_CHOICES
from pulse.models.reaction import Reaction
from pulse.models.reply import Reply


class InvalidFilter(ValueError):
    """A list filter named a tag or product category outside the allow-list."""


def validate_filters(tag: str | None, product_category: str | None) -> None:
    # "all" is what the dashboard sends when no filter is selected
    if tag and tag != "all" and tag not in TAG_CHOICES:
        raise InvalidFilter("Invalid tag")
    if product_category and product_category != "all" and product_category not in PRODUCT_CATEGORY_CHOICES:
        raise InvalidFilter("Invalid product category")


def list_messages(creator_id: str, tag: str | None = None, product_category: str | None = None, reviewed: bool | None = None) -> list[Message]:
    """Messages for one creator, newest first, replies loaded."""
    validate_filters(tag, product_category)

    stmt = (
        db.select(Message)
        .where(Message.creator_id == creator_id)
        .options(selectinload(Message.replies))
    )
    if tag and tag != "all":
        stmt = stmt.where(Message.tag == tag)
    if product_category and product_category != "all":
        stmt = stmt.where(Message.product_category == product_category)
    if reviewed is not None:
        stmt = stmt.where(Message.reviewed.is_(reviewed))

    stmt = stmt.order_by(Message.created_at.desc(), Message.id.asc())
    return list(db.session.execute(stmt).scalars().all())


def get_owned_message(message_id: str, creator_id: str) -> Message | None:
    """None when missing *or* owned by another creator (anti-enumeration)."""
    msg = db.session.get(Message, message_id)
    if msg is None or msg.creator_id != creator_id:
        return None
    return msg


def get_owned_reply(reply_id: str, creator_id: str) -> Reply | None:
    reply = db.session.get(Reply, reply_id)
    if reply is None or reply.parent is None or reply.parent.creator_id != creator_id:
        return None
    return reply


def reaction_counts(message_ids) -> dict[str, int]:
    ids = list(message_ids)
    if not ids:
        return {}
    rows = (
        db.session.query(Reaction.message_id, func.count(Reaction.id))
        .filter(Reaction.message_id.in_(ids))
        .group_by(Reaction.message_id)
        .all()
    )
    counts = {mid: 0 for mid in ids}
    counts.update({mid: int(n) for mid, n in rows})
    return counts


def serialize_with_reactions(messages: list[Message], public_replies_only: bool = False) -> list[dict]:
    counts = reaction_counts(m.id for m in messages)
    out = []
    for m in messages:
        d = m.to_dict(public_replies_only=public_replies_only)
        d["reaction_count"] = counts.get(m.id, 0)
        out.append(d)
    return out
