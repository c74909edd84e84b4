"""REST API for tile estimates."""

from tileplan.web.app import create_app

__all__ = ["create_app"]
