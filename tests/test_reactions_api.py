from pulse.blueprints.api import reactions
from pulse.extensions import db
from pulse.models import Reaction
from conftest import make_creator, make_message

def test_count_only_returns_every_reaction(app, client):
    creator_id, _ = make_creator(app, with_user=False)
    mid = make_message(app, creator_id, reactions=3)
    resp = client.get(f"/api/reactions?messageId={mid}&userHash=count_only")
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["count"] == 3 and len(body["data"]) == 3

def test_user_hash_scopes_to_one_visitor(app, client):
    creator_id, _ = make_creator(app, with_user=False)
    mid = make_message(app, creator_id, reactions=3)
    body = client.get(f"/api/reactions?messageId={mid}&userHash=visitor-1").get_json()
    assert body["count"] == 1
    assert body["data"][0]["user_hash"] == "visitor-1"

def test_message_id_required(app, client):
    assert client.get("/api/reactions").status_code == 400

def test_toggle_adds_then_removes(app, client):
    creator_id, _ = make_creator(app, with_user=False)
    mid = make_message(app, creator_id)
    body = {"messageId": mid, "userHash": "abc", "emoji": "❤️"}

    first = client.post("/api/reactions", json=body)
    assert first.status_code == 201 and first.get_json()["active"] is True
    assert client.get(f"/api/reactions?messageId={mid}&userHash=count_only").get_json()["count"] == 1

    second = client.post("/api/reactions", json=body)
    assert second.status_code == 200 and second.get_json()["active"] is False
    assert client.get(f"/api/reactions?messageId={mid}&userHash=count_only").get_json()["count"] == 0

def test_toggle_validation(app, client):
    creator_id, _ = make_creator(app, with_user=False)
    mid = make_message(app, creator_id)
    assert client.post("/api/reactions", json={"messageId": mid, "userHash": "abc"}).status_code == 400
    assert client.post("/api/reactions", json={"messageId": mid, "userHash": "count_only", "emoji": "x"}).status_code == 400
    assert client.post("/api/reactions", json={"messageId": "nope", "userHash": "abc", "emoji": "x"}).status_code == 404

def test_visitor_reacts_without_session(app, client, csrf_on):
    creator_id, _ = make_creator(app, with_user=False)
    mid = make_message(app, creator_id)
    resp = client.post("/api/reactions", json={"messageId": mid, "userHash": "abc", "emoji": "🔥"})
    assert resp.status_code == 201

def test_concurrent_duplicate_add_stays_active(app, client, monkeypatch):
    creator_id, _ = make_creator(app, with_user=False)
    mid = make_message(app, creator_id)
    with app.app_context():
        db.session.add(Reaction(message_id=mid, user_hash="abc", emoji="🔥"))
        db.session.commit()

    # The other request commits between our lookup and our insert
    real_find = reactions._find_reaction
    calls = []
    def late_find(*args):
        calls.append(args)
        return None if len(calls) == 1 else real_find(*args)
    monkeypatch.setattr(reactions, "_find_reaction", late_find)

    resp = client.post("/api/reactions", json={"messageId": mid, "userHash": "abc", "emoji": "🔥"})
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["active"] is True
    assert body["data"]["user_hash"] == "abc"
    with app.app_context():
        assert Reaction.query.filter_by(message_id=mid).count() == 1
