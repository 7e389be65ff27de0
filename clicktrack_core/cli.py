#!/usr/bin/env python3
import argparse
import json
import logging
import sys
from dataclasses import replace
from typing import List, Optional

from .config import config as default_config
from .errors import create_error_response
from .scraper import run_scrape


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="clicktrack",
        description="Load a page in headless Chromium and extract the tracking marker",
    )
    parser.add_argument("url", help="Page to load")
    parser.add_argument("--marker", default=None, help=f"Marker name (default: {default_config.marker})")
    parser.add_argument(
        "--browser-mode",
        choices=["local", "serverless"],
        default=None,
        help=f"Browser launcher (default: {default_config.browser_mode})",
    )
    parser.add_argument("--timeout", type=int, default=None, help="Navigation timeout in ms")
    parser.add_argument("--wait", type=int, default=None, help="Final async wait in ms")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else getattr(logging, default_config.log_level, logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stderr,
    )

    overrides = {}
    if args.marker:
        overrides["marker"] = args.marker
    if args.browser_mode:
        overrides["browser_mode"] = args.browser_mode
    if args.timeout is not None:
        overrides["navigation_timeout_ms"] = args.timeout
    if args.wait is not None:
        overrides["async_wait_timeout_ms"] = args.wait
    cfg = replace(default_config, **overrides)

    try:
        response = run_scrape(args.url, cfg)
    except Exception as e:
        print(json.dumps(create_error_response(e)), file=sys.stderr)
        return 1
    print(json.dumps(response, ensure_ascii=False, indent=2))
    return 0
