"""
HTTP service for the resource catalog.

Components:
- config: Settings loaded from the environment and passed to the app
- app: FastAPI application factory and JSON routes
- seo: Sitemap, robots.txt and search engine pings
"""

from .config import Settings
from .app import create_app, run_server

__all__ = ['Settings', 'create_app', 'run_server']
