from datetime import datetime, timedelta, timezone
from conftest import make_creator, make_message

def _ago(**kw):
    return datetime.now(timezone.utc) - timedelta(**kw)

def test_overview_requires_creator(app, client):
    assert client.get("/dashboard/overview.json").status_code == 401

def test_overview_metrics_hot_posts_and_share_link(app, client, creator):
    make_message(app, creator, text="fresh", created_at=_ago(hours=1))
    make_message(app, creator, text="stale", created_at=_ago(days=5))
    make_message(app, creator, text="hot", created_at=_ago(hours=2), reactions=6, replies=[("yo", True)])
    make_message(app, creator, text="done", created_at=_ago(days=1), reviewed=True)

    resp = client.get("/dashboard/overview.json")
    assert resp.status_code == 200
    view = resp.get_json()
    assert view["metrics"] == {"total": 4, "this_week": 4, "pending": 2, "replied": 1}
    assert view["counts"] == {"overview": 4, "inbox": 3, "reviewed": 2}
    assert view["needs_attention"] == 1
    assert [m["message"] for m in view["hot_posts"]] == ["hot"]
    assert view["hot_posts"][0]["reaction_count"] == 6
    assert view["hot_posts"][0]["is_new"] is True
    assert view["share_link"] == "http://example.test/p/acme"
    assert [m["message"] for m in view["messages"]] == ["fresh", "hot", "done", "stale"]

def test_overview_tab_page_and_filters(app, client, creator):
    for i in range(12):
        make_message(app, creator, text=f"q{i}", tag="question", created_at=_ago(minutes=i))
    make_message(app, creator, text="secret", tag="confession", reactions=5)

    view = client.get("/dashboard/overview.json?tab=inbox&page=2").get_json()
    assert view["pagination"]["page"] == 2
    assert view["pagination"]["total_pages"] == 2
    assert len(view["messages"]) == 3

    view = client.get("/dashboard/overview.json?tag=question").get_json()
    assert view["metrics"]["total"] == 12
    assert view["filters"] == {"tag": "question", "productCategory": "all"}
    # hot posts ignore the tag filter
    assert [m["message"] for m in view["hot_posts"]] == ["secret"]

def test_overview_rejects_bad_tab_and_filters(app, client, creator):
    assert client.get("/dashboard/overview.json?tab=archive").status_code == 400
    assert client.get("/dashboard/overview.json?tag=rant").status_code == 400

def test_overview_empty_state(app, client, creator):
    view = client.get("/dashboard/overview.json?tab=inbox").get_json()
    assert view["empty_state"] == "All caught up! No new messages to review."
    assert view["pagination"]["total_pages"] == 0

def test_public_feed_hides_private_replies_and_review_flag(app, client):
    creator_id, _ = make_creator(app, with_user=False)
    make_message(app, creator_id, text="quiet", created_at=_ago(hours=1))
    make_message(app, creator_id, text="loud", created_at=_ago(hours=5), reactions=2,
                 replies=[("public answer", True), ("private note", False)], reviewed=True)

    resp = client.get("/p/acme")
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["creator"] == {"slug": "acme", "display_name": "Acme"}
    assert [m["message"] for m in body["data"]] == ["loud", "quiet"]
    assert [r["reply_text"] for r in body["data"][0]["reply"]] == ["public answer"]
    assert "reviewed" not in body["data"][0]

def test_public_feed_unknown_slug(app, client):
    assert client.get("/p/nobody").status_code == 404

def test_healthz(client):
    assert client.get("/healthz").get_json() == {"status": "ok"}
