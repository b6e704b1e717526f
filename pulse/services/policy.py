from dataclasses import dataclass
from functools import wraps
from flask import g, jsonify, current_app
from flask_login import current_user
from pulse.services.creators import get_creator_for_company


class CreatorAuthError(Exception):
    """No authenticated creator session on the current request."""


@dataclass(frozen=True)
class CreatorAuth:
    user_id: int
    company_id: str | None


def require_creator() -> CreatorAuth:
    """
    Resolve the authenticated creator principal or raise CreatorAuthError.
    The company id may still be missing; callers decide how to treat that.
    """
    if not getattr(current_user, "is_authenticated", False):
        raise CreatorAuthError("Unauthorized")
    if not getattr(current_user, "is_active", True):
        raise CreatorAuthError("Unauthorized: inactive user")
    return CreatorAuth(user_id=current_user.id, company_id=getattr(current_user, "company_id", None))


def _error(message: str, code: int):
    return jsonify({"error": message}), code


def creator_required(fn):
    """
    Guard for creator-only JSON endpoints. On success the creator row is
    available as g.creator and the auth context as g.creator_auth.
    """
    @wraps(fn)
    def _wrap(*args, **kwargs):
        try:
            auth = require_creator()
        except CreatorAuthError:
            return _error("Unauthorized", 401)
        if not auth.company_id:
            current_app.logger.error("creator session without company id", extra={"event": "auth_company_missing", "user_id": auth.user_id})
            return _error("Company ID missing", 500)
        creator = get_creator_for_company(auth.company_id)
        if creator is None:
            return _error("Creator not found for company", 404)
        g.creator_auth = auth
        g.creator = creator
        return fn(*args, **kwargs)
    return _wrap
