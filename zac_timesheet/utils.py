"""
Utility functions: config loading, logging setup, and helpers.
"""

import os
import logging
import yaml
from datetime import datetime


ROOT_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
LOG_DIR = os.path.join(ROOT_DIR, "logs")
LOGGER_NAME = "zac_timesheet"

DEFAULT_BASE_URL = "https://secure.zac.ai"
LAMBDA_TMP_DIR = "/tmp"
SCREENSHOT_NAME = "error.png"


def setup_logging(debug: bool = False) -> logging.Logger:
    """Configure and return the project logger."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)

    # Prevent duplicate handlers on repeated calls
    if logger.handlers:
        return logger

    os.makedirs(LOG_DIR, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = os.path.join(LOG_DIR, f"run_{timestamp}.log")

    # Console handler
    ch = logging.StreamHandler()
    ch.setLevel(logging.DEBUG if debug else logging.INFO)
    ch_fmt = logging.Formatter("[%(asctime)s] %(levelname)-8s %(message)s", datefmt="%H:%M:%S")
    ch.setFormatter(ch_fmt)

    # File handler
    fh = logging.FileHandler(log_file, encoding="utf-8")
    fh.setLevel(logging.DEBUG)
    fh_fmt = logging.Formatter("[%(asctime)s] %(levelname)-8s %(name)s — %(message)s")
    fh.setFormatter(fh_fmt)

    logger.addHandler(ch)
    logger.addHandler(fh)

    logger.info(f"Log file: {log_file}")
    return logger


def load_config(config_path: str = None) -> dict:
    """Load and validate config.yaml, applying safe defaults for optional keys."""
    if config_path is None:
        config_path = os.path.join(ROOT_DIR, "config.yaml")

    if not os.path.exists(config_path):
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        config = yaml.safe_load(f) or {}

    # Credential
    for key in ("tenant_id", "login_id", "password"):
        if key not in config or config[key] is None or str(config[key]).strip() == "":
            raise ValueError(f"Missing required config key: '{key}'")
        config[key] = str(config[key])

    config.setdefault("base_url", DEFAULT_BASE_URL)
    config["base_url"] = str(config["base_url"]).rstrip("/")

    config.setdefault("debug", False)
    config.setdefault("headless", True)

    # Failure upload is disabled unless a bucket is configured
    config.setdefault("error_bucket_name", None)
    config.setdefault("aws_region", None)

    st = config.setdefault("selector_timeout", 30_000)
    if not isinstance(st, int) or st < 1_000:
        raise ValueError(f"selector_timeout must be int >= 1000 (ms), got: {st!r}")

    multiplier = config.setdefault("timeout_multiplier", 1.0)
    if not isinstance(multiplier, (int, float)) or multiplier < 0.1:
        raise ValueError(
            f"timeout_multiplier must be a number >= 0.1, got: {multiplier!r}"
        )

    codes = config.setdefault("work_codes", {})
    if codes is None:
        codes = config["work_codes"] = {}
    if not isinstance(codes, dict):
        raise ValueError(f"work_codes must be a mapping of code -> category, got: {codes!r}")
    config["work_codes"] = {str(k): str(v) for k, v in codes.items()}

    return config


def scale_timeout(base_ms: int, multiplier: float = 1.0) -> int:
    """
    Scale a wait bound by the configured timeout_multiplier.

    Returns milliseconds rounded up to the nearest 100ms.

    Examples:
        scale_timeout(10_000)      → 10_000
        scale_timeout(6_000, 1.5)  → 9_000
    """
    scaled = int(base_ms * multiplier)
    return ((scaled + 99) // 100) * 100


def get_screenshot_path() -> str:
    """Return where the failure screenshot is written.

    Lambda only allows writes under /tmp; elsewhere the working directory is used.
    """
    if os.environ.get("AWS_LAMBDA_FUNCTION_VERSION"):
        return os.path.join(LAMBDA_TMP_DIR, SCREENSHOT_NAME)
    return SCREENSHOT_NAME
