import types
import pytest
from flask import Flask, g
from pulse.services import policy

class DummyUser:
    def __init__(self, uid, auth=True, company_id="biz_1", active=True):
        self.id, self.is_authenticated, self.company_id, self.is_active = uid, auth, company_id, active

def make_app():
    app = Flask(__name__); app.config.update(SECRET_KEY="x", TESTING=True)
    return app

@pytest.fixture(autouse=True)
def _restore(monkeypatch):
    # tests below swap module globals; monkeypatch puts them back
    monkeypatch.setattr(policy, "current_user", policy.current_user)
    monkeypatch.setattr(policy, "get_creator_for_company", policy.get_creator_for_company)

def test_require_creator_unauthenticated_raises():
    policy.current_user = DummyUser(None, auth=False)
    with pytest.raises(policy.CreatorAuthError):
        policy.require_creator()

def test_require_creator_inactive_raises():
    policy.current_user = DummyUser(7, active=False)
    with pytest.raises(policy.CreatorAuthError):
        policy.require_creator()

def test_require_creator_returns_context():
    policy.current_user = DummyUser(7, company_id="biz_9")
    assert policy.require_creator() == policy.CreatorAuth(user_id=7, company_id="biz_9")

def test_creator_required_unauth_json():
    app = make_app()
    @policy.creator_required
    def v(): return "ok", 200
    policy.current_user = DummyUser(None, auth=False)
    with app.test_request_context("/x"):
        r = v(); assert r[1] == 401 and r[0].json["error"] == "Unauthorized"

def test_creator_required_missing_company_is_500():
    app = make_app()
    @policy.creator_required
    def v(): return "ok", 200
    policy.current_user = DummyUser(7, company_id=None)
    with app.test_request_context("/x"):
        r = v(); assert r[1] == 500 and r[0].json["error"] == "Company ID missing"

def test_creator_required_no_creator_is_404():
    app = make_app()
    @policy.creator_required
    def v(): return "ok", 200
    policy.current_user = DummyUser(7)
    policy.get_creator_for_company = lambda company_id: None
    with app.test_request_context("/x"):
        r = v(); assert r[1] == 404

def test_creator_required_ok_sets_g():
    app = make_app()
    creator = types.SimpleNamespace(id="c1", company_id="biz_1")
    @policy.creator_required
    def v(): return g.creator.id, 200
    policy.current_user = DummyUser(7)
    policy.get_creator_for_company = lambda company_id: creator
    with app.test_request_context("/x"):
        r = v(); assert r == ("c1", 200)
        assert g.creator_auth.user_id == 7
