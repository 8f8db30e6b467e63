"""
config_loader.py
- Loads the YAML metrics configuration used by the usage fetcher.
- Environment values from core.config act as defaults under the file contents.
"""

import yaml
from loguru import logger

from nodeusage.core import config
from nodeusage.core.constants import SOURCE_TYPE_PROMETHEUS, TLS_INSECURE_SKIP_VERIFY


def load_yaml(path):
    """Safely load a YAML file and return a parsed dict. Returns {} on failure."""
    try:
        with open(path, "r") as f:
            return yaml.safe_load(f) or {}
    except Exception as e:
        logger.error(f"[config] Failed to load {path}: {e}")
        return {}


def load_metrics_conf(path=None):
    """
    Build the metrics source mapping consumed by new_metrics_client().

    The file may hold the block at the top level or under a `metrics:` key.
    """
    metrics_conf = {
        "type": SOURCE_TYPE_PROMETHEUS,
        "address": config.PROMETHEUS_ADDRESS,
        "conf": {TLS_INSECURE_SKIP_VERIFY: config.PROMETHEUS_INSECURE_SKIP_VERIFY},
    }

    data = load_yaml(path or config.METRICS_CONFIG_PATH)
    section = data.get("metrics", data) if isinstance(data, dict) else {}
    if not isinstance(section, dict):
        logger.warning(f"[config] Ignoring malformed metrics section in {path or config.METRICS_CONFIG_PATH}")
        return metrics_conf

    for key, value in section.items():
        if key == "conf" and isinstance(value, dict):
            metrics_conf["conf"].update(value)
        else:
            metrics_conf[key] = value

    logger.debug(f"[config] Metrics source: type={metrics_conf['type']} address={metrics_conf['address']}")
    return metrics_conf
