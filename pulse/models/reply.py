from pulse.extensions import db
from pulse.utils.helpers import new_id, utcnow, isoformat

class Reply(db.Model):
    __tablename__ = "replies"

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    message_id = db.Column(
        db.String(36),
        db.ForeignKey("messages.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    reply_text = db.Column(db.Text, nullable=False)
    # private by default; creator opts in to showing it on the public feed
    is_public = db.Column(db.Boolean, nullable=False, default=False)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow)

    parent = db.relationship("Message", back_populates="replies")

    def to_dict(self):
        return dict(
            id=self.id,
            message_id=self.message_id,
            reply_text=self.reply_text,
            is_public=bool(self.is_public),
            created_at=isoformat(self.created_at),
        )
