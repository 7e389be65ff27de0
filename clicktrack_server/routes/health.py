"""Liveness and health endpoints"""

from flask import Blueprint, jsonify

from clicktrack_core import __version__
from clicktrack_core.config import config

health_bp = Blueprint('health', __name__)


@health_bp.route('/', methods=['GET'])
def liveness():
    return "OK"


@health_bp.route('/health', methods=['GET'])
def health_check():
    """Health check endpoint"""
    return jsonify({
        "status": "healthy",
        "marker": config.marker,
        "browser_mode": config.browser_mode,
        "version": __version__,
    })
