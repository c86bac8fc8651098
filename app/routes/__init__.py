from .onboarding.auth import auth_bp
from .catalog import catalog_bp
from .shopper import shopper_bp


__all__ = [
    'auth_bp',
    'catalog_bp',
    'shopper_bp',
]
