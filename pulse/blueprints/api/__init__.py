from flask import Blueprint

bp = Blueprint("api", __name__)

# Import submodules so their @bp.route decorators register
from . import feedback  # noqa: E402,F401
from . import replies  # noqa: E402,F401
from . import reactions  # noqa: E402,F401
from . import creator_feedback  # noqa: E402,F401
