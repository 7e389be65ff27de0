"""Flask application setup for clicktrack server"""

import logging

from flask import Flask
from flask_cors import CORS

from clicktrack_core.config import config
from clicktrack_server.routes.health import health_bp
from clicktrack_server.routes.scrape import scrape_bp

# Configure logging
logging.basicConfig(
    level=getattr(logging, config.log_level, logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)


def create_app() -> Flask:
    flask_app = Flask(__name__)
    CORS(flask_app)

    # Register blueprints
    flask_app.register_blueprint(health_bp)
    flask_app.register_blueprint(scrape_bp)
    return flask_app


app = create_app()
