from flask import Blueprint
from app.version import API_PREFIX
from app.utils import auth_required

shopper_bp = Blueprint("shopper", __name__, url_prefix=f"{API_PREFIX}/shopper")


@shopper_bp.before_request
@auth_required
def _enforce_signed_in():
    """Every shopper route needs a signed-in profile."""
    return None


from . import cart  # noqa: E402
from . import orders  # noqa: E402
from . import profits  # noqa: E402
from . import notifications  # noqa: E402
from . import profile  # noqa: E402
from . import translate  # noqa: E402
