"""
API package for the Bristol circuit parser.
"""

from .endpoints import router
from .server import create_app, run_server

__all__ = ["create_app", "run_server", "router"]
