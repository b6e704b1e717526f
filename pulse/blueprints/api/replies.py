from flask import jsonify, request, current_app, g
from pulse.extensions import db
from pulse.models.reply import Reply
from pulse.services import messages as inbox
from pulse.services.policy import creator_required
from pulse.utils.validators import clean_text
from . import bp


def _json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


@bp.post("/replies")
@creator_required
def reply_create():
    """
    Body: { messageId, replyText, isPublic? }
    Returns: 201 { data: <reply> }
    """
    data = _json_body()
    text = clean_text(data.get("replyText"))
    is_public = data.get("isPublic", False)

    if not text:
        return jsonify({"error": "Reply text is required"}), 400
    if not isinstance(is_public, bool):
        return jsonify({"error": "isPublic must be a boolean"}), 400

    message_id = data.get("messageId")
    msg = inbox.get_owned_message(message_id, g.creator.id) if isinstance(message_id, str) else None
    if msg is None:
        return jsonify({"error": "Message not found"}), 404

    reply = Reply(message_id=msg.id, reply_text=text, is_public=is_public)
    db.session.add(reply)
    db.session.commit()

    current_app.logger.info(
        "reply_created",
        extra={"event": "reply_created", "message_id": msg.id, "is_public": is_public},
    )
    return jsonify({"data": reply.to_dict()}), 201


@bp.patch("/replies/<reply_id>")
@creator_required
def reply_update(reply_id):
    """Body: { isPublic: bool }"""
    is_public = _json_body().get("isPublic")
    if not isinstance(is_public, bool):
        return jsonify({"error": "isPublic must be a boolean"}), 400

    reply = inbox.get_owned_reply(reply_id, g.creator.id)
    if reply is None:
        return jsonify({"error": "Not found"}), 404

    reply.is_public = is_public
    db.session.commit()
    current_app.logger.info(
        "reply_visibility_changed",
        extra={"event": "reply_visibility_changed", "reply_id": reply.id, "is_public": is_public},
    )
    return jsonify({"data": reply.to_dict()}), 200
