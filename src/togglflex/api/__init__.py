"""HTTP command surface for togglflex."""

from togglflex.api.app import create_app
from togglflex.api.router_flex import create_flex_router, install_error_handlers

__all__ = ["create_app", "create_flex_router", "install_error_handlers"]
