import pytest
from sqlalchemy.exc import SQLAlchemyError
from pulse.extensions import db
from pulse.models import CreatorFeedback, User
from conftest import login, make_creator

URL = "/api/creator-feedback"

def test_valid_submission_returns_201_and_echoes_fields(app, client, creator):
    resp = client.post(URL, json={"category": "idea", "subject": "  Dark mode  ", "message": "  Please add it \n"})
    assert resp.status_code == 201
    data = resp.get_json()["data"]
    assert data["category"] == "idea"
    assert data["subject"] == "Dark mode"
    assert data["message"] == "Please add it"
    assert data["creator_id"] == creator
    assert data["company_id"] == "biz_1"
    with app.app_context():
        assert CreatorFeedback.query.count() == 1

def test_long_subject_is_kept_whole(app, client, creator):
    subject = "s" * 300
    resp = client.post(URL, json={"category": "idea", "subject": subject, "message": "hi"})
    assert resp.status_code == 201
    assert resp.get_json()["data"]["subject"] == subject
    with app.app_context():
        assert CreatorFeedback.query.one().subject == subject

def test_blank_subject_is_stored_as_null(app, client, creator):
    resp = client.post(URL, json={"category": "bug", "subject": "   ", "message": "Broken"})
    assert resp.status_code == 201
    assert resp.get_json()["data"]["subject"] is None

@pytest.mark.parametrize("category", ["", "bugs", "BUG", None, 3, "question"])
def test_unknown_category_is_400(app, client, creator, category):
    resp = client.post(URL, json={"category": category, "message": "hi"})
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "Invalid category"

@pytest.mark.parametrize("message", ["", "   ", "\n\t", None, 42])
def test_empty_message_is_400(app, client, creator, message):
    resp = client.post(URL, json={"category": "feedback", "message": message})
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "Message is required"

def test_unauthenticated_is_401(app, client):
    make_creator(app)
    resp = client.post(URL, json={"category": "bug", "message": "hi"})
    assert resp.status_code == 401
    assert resp.get_json()["error"] == "Unauthorized"

def test_unauthenticated_is_401_with_csrf_enabled(app, client, csrf_on):
    make_creator(app)
    resp = client.post(URL, json={"category": "bug", "message": "hi"})
    assert resp.status_code == 401
    assert resp.get_json()["error"] == "Unauthorized"

def test_signed_in_creator_submits_without_csrf_token(app, client, creator, csrf_on):
    resp = client.post(URL, json={"category": "bug", "message": "hi"})
    assert resp.status_code == 201

def test_inactive_user_is_401(app, client):
    _, user_id = make_creator(app)
    with app.app_context():
        db.session.get(User, user_id).is_active = False
        db.session.commit()
    login(client, user_id)
    resp = client.post(URL, json={"category": "bug", "message": "hi"})
    assert resp.status_code == 401

def test_no_creator_for_company_is_404(app, client):
    with app.app_context():
        u = User(email="orphan@example.com", company_id="biz_without_creator")
        u.set_password("x")
        db.session.add(u); db.session.commit()
        uid = u.id
    login(client, uid)
    resp = client.post(URL, json={"category": "bug", "message": "hi"})
    assert resp.status_code == 404

def test_user_without_company_is_500(app, client):
    with app.app_context():
        u = User(email="nocompany@example.com")
        u.set_password("x")
        db.session.add(u); db.session.commit()
        uid = u.id
    login(client, uid)
    resp = client.post(URL, json={"category": "bug", "message": "hi"})
    assert resp.status_code == 500
    assert resp.get_json()["error"] == "Company ID missing"

def test_storage_failure_is_500(app, client, creator, monkeypatch):
    def _boom():
        raise SQLAlchemyError("db down")
    monkeypatch.setattr(db.session, "commit", _boom)
    resp = client.post(URL, json={"category": "bug", "message": "hi"})
    assert resp.status_code == 500
    assert resp.get_json()["error"] == "Failed to submit feedback"

def test_non_json_body_is_treated_as_empty(app, client, creator):
    resp = client.post(URL, data="category=bug", content_type="text/plain")
    assert resp.status_code == 400
