from sqlalchemy import CheckConstraint
from pulse.extensions import db
from pulse.utils.helpers import new_id, utcnow, isoformat

CATEGORY_BUG = "bug"
CATEGORY_FEEDBACK = "feedback"
CATEGORY_IDEA = "idea"
CATEGORY_OTHER = "other"
CATEGORY_CHOICES = (CATEGORY_BUG, CATEGORY_FEEDBACK, CATEGORY_IDEA, CATEGORY_OTHER)

class CreatorFeedback(db.Model):
    """Support ticket a creator sends to the Pulse team."""
    __tablename__ = "creator_feedback"

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    creator_id = db.Column(
        db.String(36),
        db.ForeignKey("creators.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    company_id = db.Column(db.String(64), nullable=False, index=True)
    # Keep the user reference loose; we store the id only
    user_id = db.Column(db.Integer, nullable=True)
    category = db.Column(db.String(20), nullable=False)
    subject = db.Column(db.Text, nullable=True)
    message = db.Column(db.Text, nullable=False)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow)

    __table_args__ = (
        CheckConstraint(
            "category IN ('bug','feedback','idea','other')",
            name="ck_creator_feedback_category_valid",
        ),
    )

    def to_dict(self):
        return dict(
            id=self.id,
            creator_id=self.creator_id,
            company_id=self.company_id,
            user_id=self.user_id,
            category=self.category,
            subject=self.subject,
            message=self.message,
            created_at=isoformat(self.created_at),
        )
