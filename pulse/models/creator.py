from sqlalchemy import func
from pulse.extensions import db
from pulse.utils.helpers import new_id

class Creator(db.Model):
    """Owner of an anonymous inbox; one per company."""
    __tablename__ = "creators"

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    company_id = db.Column(db.String(64), nullable=False, unique=True, index=True)
    # public share link: /p/<slug>
    slug = db.Column(db.String(64), nullable=False, unique=True, index=True)
    display_name = db.Column(db.String(255), nullable=True)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=func.now())

    messages = db.relationship(
        "Message",
        back_populates="creator",
        cascade="all, delete-orphan",
    )

    def to_dict(self):
        return dict(
            id=self.id,
            company_id=self.company_id,
            slug=self.slug,
            display_name=self.display_name,
        )

    def __repr__(self) -> str:
        return f"<Creator id={self.id} slug={self.slug!r}>"
