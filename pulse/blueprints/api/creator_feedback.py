from flask import jsonify, request, current_app
from sqlalchemy.exc import SQLAlchemyError
from pulse.extensions import db, limiter
from pulse.models.creator_feedback import CreatorFeedback, CATEGORY_CHOICES
from pulse.services.creators import get_creator_for_company
from pulse.services.policy import require_creator, CreatorAuthError
from pulse.utils.validators import clean_text
from . import bp


@bp.post("/creator-feedback")
@limiter.limit("10 per minute; 50 per day")
def creator_feedback_create():
    """
    Support ticket from a creator to the Pulse team.
    Body: { category: bug|feedback|idea|other, subject?: str, message: str }
    Returns: 201 { data: <record> }
    """
    try:
        auth = require_creator()

        if not auth.company_id:
            return jsonify({"error": "Company ID missing"}), 500

        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            data = {}
        category = data.get("category")
        message = clean_text(data.get("message"))
        subject = clean_text(data.get("subject"))

        if not isinstance(category, str) or category not in CATEGORY_CHOICES:
            return jsonify({"error": "Invalid category"}), 400

        if not message:
            return jsonify({"error": "Message is required"}), 400

        creator = get_creator_for_company(auth.company_id)
        if creator is None:
            return jsonify({"error": "Creator not found for company"}), 404

        fb = CreatorFeedback(
            creator_id=creator.id,
            company_id=auth.company_id,
            user_id=auth.user_id,
            category=category,
            subject=subject,
            message=message,
        )
        try:
            db.session.add(fb)
            db.session.commit()
        except SQLAlchemyError:
            db.session.rollback()
            current_app.logger.exception("Error inserting creator feedback")
            return jsonify({"error": "Failed to submit feedback"}), 500

        # No message body in logs (support notes can carry PII)
        current_app.logger.info(
            "creator_feedback_submitted",
            extra={
                "event": "creator_feedback_submitted",
                "creator_id": creator.id,
                "category": category,
                "has_subject": subject is not None,
            },
        )
        return jsonify({"data": fb.to_dict()}), 201

    except CreatorAuthError:
        return jsonify({"error": "Unauthorized"}), 401
    except Exception:
        current_app.logger.exception("Error handling POST /api/creator-feedback")
        return jsonify({"error": "Internal server error"}), 500
