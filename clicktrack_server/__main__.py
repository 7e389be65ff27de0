"""Main entry point for clicktrack server"""

import logging

from clicktrack_core.config import config
from clicktrack_server.app import app

logger = logging.getLogger(__name__)


def main():
    """Run the clicktrack API server"""
    logger.info(f"Scraper running on :{config.port}")
    logger.info(f"Marker: {config.marker}")
    logger.info(f"Browser mode: {config.browser_mode}")
    app.run(host=config.host, port=config.port, debug=False, use_reloader=False)


if __name__ == '__main__':
    main()
