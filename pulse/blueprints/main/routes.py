from flask import jsonify
from pulse.services import dashboard
from pulse.services import messages as inbox
from pulse.services.creators import get_creator_by_slug
from . import bp


@bp.get("/p/<slug>")
def public_feed(slug):
    """
    Public page data for a creator's share link: the creator's name and
    their messages with public replies only, hottest first.
    """
    creator = get_creator_by_slug(slug)
    if creator is None:
        return jsonify({"error": "Creator not found"}), 404

    items = inbox.serialize_with_reactions(inbox.list_messages(creator.id), public_replies_only=True)
    for m in items:
        # creators see the reviewed flag; visitors do not
        m.pop("reviewed", None)
    return jsonify({
        "creator": {"slug": creator.slug, "display_name": creator.display_name},
        "data": dashboard.rank_hot(items),
    }), 200
