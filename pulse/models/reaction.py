from sqlalchemy import UniqueConstraint
from pulse.extensions import db
from pulse.utils.helpers import new_id, utcnow, isoformat

class Reaction(db.Model):
    __tablename__ = "reactions"

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    message_id = db.Column(
        db.String(36),
        db.ForeignKey("messages.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    # anonymous visitor fingerprint; never a user id
    user_hash = db.Column(db.String(64), nullable=False)
    emoji = db.Column(db.String(16), nullable=False)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow)

    parent = db.relationship("Message", back_populates="reactions")

    __table_args__ = (
        UniqueConstraint("message_id", "user_hash", "emoji", name="uq_reactions_message_user_emoji"),
    )

    def to_dict(self):
        return dict(
            id=self.id,
            message_id=self.message_id,
            user_hash=self.user_hash,
            emoji=self.emoji,
            created_at=isoformat(self.created_at),
        )
