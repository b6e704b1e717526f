from flask import jsonify, request, current_app, g
from pulse.services import dashboard
from pulse.services import messages as inbox
from pulse.services.creators import share_link
from pulse.services.policy import creator_required
from pulse.utils.helpers import safe_int
from . import bp


@bp.get("/overview.json")
@creator_required
def overview():
    """
    Dashboard in one call: metrics, tab counts, the requested page of the
    tab, hot posts and the share link.
    Query: tab=overview|inbox|reviewed, page, tag, productCategory
    """
    tab = (request.args.get("tab") or dashboard.TAB_OVERVIEW).strip().lower()
    if tab not in dashboard.TABS:
        return jsonify({"error": "Invalid tab"}), 400
    page = safe_int(request.args.get("page"), 1)
    tag = (request.args.get("tag") or "").strip() or None
    product_category = (request.args.get("productCategory") or "").strip() or None

    try:
        filtered = inbox.list_messages(g.creator.id, tag=tag, product_category=product_category)
    except inbox.InvalidFilter as e:
        return jsonify({"error": str(e)}), 400

    # Hot posts always rank the whole inbox, not the filtered view
    if tag in (None, "all") and product_category in (None, "all"):
        everything = filtered
    else:
        everything = inbox.list_messages(g.creator.id)

    cfg = current_app.config
    payload = dashboard.build_overview(
        [m.to_dict() for m in filtered],
        tab=tab,
        page=page,
        hot_source=inbox.serialize_with_reactions(everything),
        per_page=cfg.get("PULSE_MESSAGES_PER_PAGE", dashboard.MESSAGES_PER_PAGE),
        hot_threshold=cfg.get("PULSE_HOT_POST_THRESHOLD", dashboard.HOT_POST_THRESHOLD),
    )
    payload["share_link"] = share_link(g.creator, cfg.get("APP_BASE_URL", ""))
    payload["filters"] = {"tag": tag or "all", "productCategory": product_category or "all"}
    return jsonify(payload), 200
