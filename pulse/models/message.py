from sqlalchemy import CheckConstraint
from pulse.extensions import db
from pulse.utils.helpers import new_id, utcnow, isoformat

# Keep simple text+CHECK for evolvable enums (no DB enum migration pain)
TAG_QUESTION = "question"
TAG_FEEDBACK = "feedback"
TAG_CONFESSION = "confession"
TAG_CHOICES = (TAG_QUESTION, TAG_FEEDBACK, TAG_CONFESSION)

PRODUCT_CATEGORY_CHOICES = ("main_product", "service", "feature_request", "bug_report", "other")

def _in_list(column: str, choices) -> str:
    return f"{column} IN ({','.join(repr(c) for c in choices)})"

class Message(db.Model):
    __tablename__ = "messages"

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    creator_id = db.Column(
        db.String(36),
        db.ForeignKey("creators.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    message = db.Column(db.Text, nullable=False)
    tag = db.Column(db.String(20), nullable=False)
    product_category = db.Column(db.String(32), nullable=True)
    reviewed = db.Column(db.Boolean, nullable=False, default=False)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow)

    creator = db.relationship("Creator", back_populates="messages")
    replies = db.relationship(
        "Reply",
        back_populates="parent",
        cascade="all, delete-orphan",
        order_by="Reply.created_at",
    )
    reactions = db.relationship(
        "Reaction",
        back_populates="parent",
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        CheckConstraint(_in_list("tag", TAG_CHOICES), name="ck_messages_tag_valid"),
        CheckConstraint(
            "product_category IS NULL OR " + _in_list("product_category", PRODUCT_CATEGORY_CHOICES),
            name="ck_messages_product_category_valid",
        ),
        db.Index("ix_messages_creator_created_at", "creator_id", "created_at"),
    )

    def to_dict(self, public_replies_only: bool = False):
        replies = [r for r in self.replies if r.is_public or not public_replies_only]
        return dict(
            id=self.id,
            creator_id=self.creator_id,
            message=self.message,
            tag=self.tag,
            product_category=self.product_category,
            reviewed=bool(self.reviewed),
            created_at=isoformat(self.created_at),
            reply=[r.to_dict() for r in replies],
        )

    def __repr__(self) -> str:
        return f"<Message id={self.id} tag={self.tag!r} reviewed={self.reviewed}>"
