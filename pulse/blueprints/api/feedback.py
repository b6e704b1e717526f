from flask import jsonify, request, current_app, g
from pulse.extensions import db, limiter
from pulse.models.message import Message, TAG_CHOICES, PRODUCT_CATEGORY_CHOICES
from pulse.services import messages as inbox
from pulse.services.creators import get_creator_by_slug
from pulse.services.policy import creator_required
from pulse.utils.validators import clean_text, parse_bool
from . import bp

MAX_MESSAGE_LEN = 5000


@bp.get("/feedback")
@creator_required
def feedback_list():
    """
    Messages in the caller's inbox, newest first, replies nested under "reply".
    Query: creatorId?, tag?, productCategory?, reviewed?
    """
    creator_id = (request.args.get("creatorId") or "").strip() or g.creator.id
    if creator_id != g.creator.id:
        return jsonify({"error": "Not found"}), 404

    reviewed = None
    if request.args.get("reviewed") is not None:
        reviewed = parse_bool(request.args.get("reviewed"))
        if reviewed is None:
            return jsonify({"error": "reviewed must be true or false"}), 400

    try:
        items = inbox.list_messages(
            creator_id,
            tag=(request.args.get("tag") or "").strip() or None,
            product_category=(request.args.get("productCategory") or "").strip() or None,
            reviewed=reviewed,
        )
    except inbox.InvalidFilter as e:
        return jsonify({"error": str(e)}), 400

    return jsonify({"data": [m.to_dict() for m in items]}), 200


@bp.post("/feedback")
@limiter.limit("20 per minute; 200 per day")
def feedback_submit():
    """
    Anonymous submission from the public creator page.
    Body: { creatorSlug, message, tag, productCategory? }
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}

    text = clean_text(data.get("message"))
    tag = data.get("tag")
    product_category = data.get("productCategory") or None

    if not text:
        return jsonify({"error": "Message is required"}), 400
    if len(text) > MAX_MESSAGE_LEN:
        return jsonify({"error": f"Message must be at most {MAX_MESSAGE_LEN} characters"}), 400
    if tag not in TAG_CHOICES:
        return jsonify({"error": "Invalid tag"}), 400
    if product_category is not None and product_category not in PRODUCT_CATEGORY_CHOICES:
        return jsonify({"error": "Invalid product category"}), 400

    creator = get_creator_by_slug(data.get("creatorSlug") if isinstance(data.get("creatorSlug"), str) else None)
    if creator is None:
        return jsonify({"error": "Creator not found"}), 404

    msg = Message(creator_id=creator.id, message=text, tag=tag, product_category=product_category)
    db.session.add(msg)
    db.session.commit()

    current_app.logger.info(
        "message_submitted",
        extra={"event": "message_submitted", "creator_id": creator.id, "tag": tag, "message_len": len(text)},
    )
    return jsonify({"data": msg.to_dict(public_replies_only=True)}), 201


@bp.patch("/feedback/<message_id>")
@creator_required
def feedback_update(message_id):
    """Body: { reviewed: bool }"""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}
    reviewed = data.get("reviewed")
    if not isinstance(reviewed, bool):
        return jsonify({"error": "reviewed must be a boolean"}), 400

    msg = inbox.get_owned_message(message_id, g.creator.id)
    if msg is None:
        return jsonify({"error": "Not found"}), 404

    msg.reviewed = reviewed
    db.session.commit()
    current_app.logger.info(
        "message_reviewed",
        extra={"event": "message_reviewed", "message_id": msg.id, "reviewed": reviewed},
    )
    return jsonify({"data": msg.to_dict()}), 200


@bp.delete("/feedback/<message_id>")
@creator_required
def feedback_delete(message_id):
    msg = inbox.get_owned_message(message_id, g.creator.id)
    if msg is None:
        return jsonify({"error": "Not found"}), 404

    db.session.delete(msg)
    db.session.commit()
    current_app.logger.info(
        "message_deleted",
        extra={"event": "message_deleted", "message_id": message_id, "creator_id": g.creator.id},
    )
    return jsonify({"ok": True}), 200
