"""Scrape endpoint: load a page and return the marker value"""

import logging

from flask import Blueprint, request, jsonify

from clicktrack_core.config import config
from clicktrack_core.errors import create_error_response, get_error_category
from clicktrack_core.scraper import run_scrape

logger = logging.getLogger(__name__)

scrape_bp = Blueprint('scrape', __name__)


@scrape_bp.route('/scrape', methods=['POST'])
def scrape_url():
    data = request.get_json(silent=True) or {}
    url = data.get('url') if isinstance(data, dict) else None
    if not url or not isinstance(url, str):
        return jsonify({"error": "Missing 'url' in body"}), 400

    logger.info(f"Scrape requested: {url}")
    try:
        result = run_scrape(url, config)
    except Exception as e:
        logger.error(f"Scrape of {url} failed ({get_error_category(e)}): {e}")
        return jsonify(create_error_response(e)), 500
    return jsonify(result)
