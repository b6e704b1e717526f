from pulse.extensions import db
from pulse.models.creator import Creator

def get_creator_for_company(company_id: str | None) -> Creator | None:
    if not company_id:
        return None
    return db.session.execute(
        db.select(Creator).where(Creator.company_id == company_id)
    ).scalar_one_or_none()

def get_creator_by_slug(slug: str | None) -> Creator | None:
    if not slug:
        return None
    return db.session.execute(
        db.select(Creator).where(Creator.slug == slug.strip().lower())
    ).scalar_one_or_none()

def share_link(creator: Creator, base_url: str) -> str:
    return f"{(base_url or '').rstrip('/')}/p/{creator.slug}"
