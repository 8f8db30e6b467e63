"""
config.py
- Defines global configuration values derived from environment variables.
- Configures the loguru sink once for every module that imports it.
"""

import os
import sys

from loguru import logger

from nodeusage.core.constants import DEFAULT_PERIOD, DEFAULT_QUERY_TIMEOUT

# --- Runtime Behavior Flags ---
DEBUG = os.getenv("DEBUG", "false").lower() == "true"
LOG_LEVEL = "DEBUG" if DEBUG else "INFO"

# --- Prometheus Source ---
PROMETHEUS_ADDRESS = os.getenv("PROMETHEUS_ADDRESS", "http://prometheus:9090")
PROMETHEUS_INSECURE_SKIP_VERIFY = os.getenv("PROMETHEUS_INSECURE_SKIP_VERIFY", "false").lower()
METRICS_CONFIG_PATH = os.getenv("METRICS_CONFIG_PATH", "/etc/nodeusage/metrics.yml")

# --- Query Behavior ---
DEFAULT_QUERY_PERIOD = os.getenv("DEFAULT_PERIOD", DEFAULT_PERIOD)
QUERY_TIMEOUT_SECONDS = float(os.getenv("QUERY_TIMEOUT_SECONDS", DEFAULT_QUERY_TIMEOUT))

# --- Diagnostics API ---
API_HOST = os.getenv("NODEUSAGE_API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("NODEUSAGE_API_PORT", "6060"))
SENTRY_DSN = os.getenv("SENTRY_DSN")


def setup_logging(level=LOG_LEVEL):
    """Route loguru output to stderr with the shared colorized format."""
    logger.remove()
    logger.add(
        sink=sys.stderr,
        level=level,
        format="<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
               "<level>{level: <8}</level> | "
               "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
               "<level>{message}</level>",
        colorize=True,
    )
