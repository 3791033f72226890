"""
ZAC Daily Report Registration — Entry Point

Usage:
    python main.py --request request.yaml
    python main.py --config path/to/config.yaml --request request.yaml
"""

import argparse
import os
import sys

import yaml
from playwright.sync_api import sync_playwright

from zac_timesheet.client import ZacClient
from zac_timesheet.models import RegistrationRequest, validate_request
from zac_timesheet.utils import setup_logging, load_config


def load_request(request_path: str) -> RegistrationRequest:
    """Read a registration request from a YAML (or JSON) file."""
    if not os.path.exists(request_path):
        raise FileNotFoundError(f"Request file not found: {request_path}")
    with open(request_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    return RegistrationRequest.from_dict(data)


def main(argv=None) -> int:
    # ── Parse arguments ──────────────────────────────────────────────
    parser = argparse.ArgumentParser(
        description="Register a daily work report in ZAC"
    )
    parser.add_argument(
        "--config", "-c",
        default=None,
        help="Path to config.yaml (default: ./config.yaml)"
    )
    parser.add_argument(
        "--request", "-r",
        required=True,
        help="Path to the registration request (YAML)"
    )
    args = parser.parse_args(argv)

    # ── Setup ────────────────────────────────────────────────────────
    config = load_config(args.config)
    logger = setup_logging(debug=config["debug"])
    try:
        request = validate_request(load_request(args.request))
    except (FileNotFoundError, ValueError, yaml.YAMLError) as err:
        logger.error(f"Invalid request: {err}")
        return 1

    logger.info("Configuration loaded:")
    logger.info(f"  Tenant:           {config['tenant_id']}")
    logger.info(f"  Login:            {config['login_id']}")
    logger.info(f"  Work date:        {request.work_date}")
    logger.info(f"  Work entries:     {len(request.entries)}")
    logger.info(f"  Headless:         {config['headless']}")
    logger.info(f"  Error bucket:     {config['error_bucket_name'] or 'disabled'}")

    # ── Launch browser ───────────────────────────────────────────────
    with sync_playwright() as p:
        browser = p.chromium.launch(
            headless=True if config["headless"] else False,
            slow_mo=0 if config["headless"] else 250,
        )
        try:
            client = ZacClient.from_config(browser, config, logger)
            client.register(request)
        except Exception as err:
            logger.error(f"Registration failed: {type(err).__name__}: {err}")
            return 1
        finally:
            logger.info("Closing browser...")
            browser.close()

    logger.info("✅ Daily report registered")
    return 0


if __name__ == "__main__":
    sys.exit(main())
