from flask import request, jsonify, current_app
from flask_login import login_user, logout_user, current_user
from flask_wtf.csrf import generate_csrf
from sqlalchemy import func
from pulse.extensions import db, limiter
from pulse.models.user import User
from pulse.services.creators import get_creator_for_company
from . import bp


def _login_email_scope():
    data_json = request.get_json(silent=True) or {}
    email = (data_json.get("email") or "").strip().lower() if isinstance(data_json, dict) else ""
    # Keep a stable scope even if email is blank
    return f"login-email:{email or 'missing'}"


def _whoami(user):
    creator = get_creator_for_company(user.company_id)
    return {
        "id": user.id,
        "email": user.email,
        "company_id": user.company_id,
        "creator": creator.to_dict() if creator else None,
    }


@bp.post("/login")
@limiter.limit("10 per minute; 100 per hour")              # per-IP (anon → IP via _rate_limit_key)
@limiter.limit("5 per minute; 20 per hour", key_func=_login_email_scope)  # per-account
def login_post():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}
    email = (data.get("email") or "").strip() if isinstance(data.get("email"), str) else ""
    password = data.get("password") if isinstance(data.get("password"), str) else ""

    if not email or not password:
        return jsonify({"error": "Email and password are required"}), 400

    user = db.session.execute(
        db.select(User).where(func.lower(User.email) == func.lower(email))
    ).scalar_one_or_none()

    if not user or not user.check_password(password) or not user.is_active:
        current_app.logger.info("login_failed", extra={"event": "login_failed"})
        return jsonify({"error": "Invalid credentials"}), 401

    login_user(user)
    current_app.logger.info("login_ok", extra={"event": "login_ok", "user_id": user.id})
    return jsonify({"ok": True, "user": _whoami(user)}), 200


@bp.post("/logout")
def logout_post():
    if current_user.is_authenticated:
        logout_user()
    return jsonify({"ok": True}), 200


@bp.get("/me")
def me():
    if not current_user.is_authenticated:
        return jsonify({"error": "Unauthorized"}), 401
    return jsonify({"user": _whoami(current_user)}), 200


@bp.get("/csrf")
def csrf_token():
    """Token for the X-CSRFToken header on subsequent JSON writes."""
    return jsonify({"csrf_token": generate_csrf()}), 200
