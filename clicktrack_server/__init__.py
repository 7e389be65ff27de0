"""
clicktrack_server - HTTP API for the clicktrack marker scraper
"""

from clicktrack_core.config import Config, config
from clicktrack_server.app import app, create_app

__all__ = [
    'Config',
    'config',
    'app',
    'create_app',
]
