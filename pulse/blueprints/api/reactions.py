from flask import jsonify, request, current_app
from sqlalchemy.exc import IntegrityError
from pulse.extensions import db, limiter
from pulse.models.message import Message
from pulse.models.reaction import Reaction
from pulse.utils.validators import clean_str
from . import bp

# Sentinel the dashboard sends when it only wants the total for a message
COUNT_ONLY = "count_only"
MAX_EMOJI_LEN = 16


def _find_reaction(message_id, user_hash, emoji):
    return Reaction.query.filter_by(message_id=message_id, user_hash=user_hash, emoji=emoji).one_or_none()


@bp.get("/reactions")
def reactions_list():
    """
    Query: messageId, userHash.
    userHash=count_only returns every reaction on the message; any other
    value returns just that visitor's reactions (to render toggled state).
    """
    message_id = clean_str(request.args.get("messageId"), max_len=36)
    user_hash = clean_str(request.args.get("userHash"), max_len=64)
    if not message_id:
        return jsonify({"error": "messageId is required"}), 400

    query = Reaction.query.filter(Reaction.message_id == message_id)
    if user_hash and user_hash != COUNT_ONLY:
        query = query.filter(Reaction.user_hash == user_hash)
    rows = query.order_by(Reaction.created_at.asc()).all()

    return jsonify({"data": [r.to_dict() for r in rows], "count": len(rows)}), 200


@bp.post("/reactions")
@limiter.limit("60 per minute")
def reactions_toggle():
    """
    Body: { messageId, userHash, emoji }
    Adds the reaction, or removes it when the visitor already left it.
    Returns: { data: <reaction>|null, active: bool }
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}
    message_id = clean_str(data.get("messageId"), max_len=36)
    user_hash = clean_str(data.get("userHash"), max_len=64)
    emoji = clean_str(data.get("emoji"), max_len=MAX_EMOJI_LEN)

    if not (message_id and user_hash and emoji):
        return jsonify({"error": "messageId, userHash and emoji are required"}), 400
    if user_hash == COUNT_ONLY:
        return jsonify({"error": "Invalid userHash"}), 400
    if db.session.get(Message, message_id) is None:
        return jsonify({"error": "Message not found"}), 404

    existing = _find_reaction(message_id, user_hash, emoji)
    if existing is not None:
        db.session.delete(existing)
        db.session.commit()
        current_app.logger.info("reaction_removed", extra={"event": "reaction_removed", "message_id": message_id})
        return jsonify({"data": None, "active": False}), 200

    reaction = Reaction(message_id=message_id, user_hash=user_hash, emoji=emoji)
    db.session.add(reaction)
    try:
        db.session.commit()
    except IntegrityError:
        # Same visitor, same emoji, added by a parallel request
        db.session.rollback()
        reaction = _find_reaction(message_id, user_hash, emoji)
        if reaction is None:
            raise
        return jsonify({"data": reaction.to_dict(), "active": True}), 200
    current_app.logger.info("reaction_added", extra={"event": "reaction_added", "message_id": message_id})
    return jsonify({"data": reaction.to_dict(), "active": True}), 201
