"""
source.py
- Common contract for scheduler metrics sources.
- Builds a concrete client from a scheduler-style metrics config block:

    metrics:
      type: prometheus
      address: https://prometheus.monitoring:9090
      conf:
        tls.insecureSkipVerify: "true"
"""

from abc import ABC, abstractmethod

from nodeusage.core.constants import SOURCE_TYPE_PROMETHEUS
from nodeusage.lib.metrics.exceptions import UnsupportedSourceError


class MetricsClient(ABC):

    @abstractmethod
    def node_metrics_avg(self, node_name, period, timeout=None):
        """Return NodeMetrics averaged over `period` for `node_name`."""


def new_metrics_client(metrics_conf):
    """
    Create a metrics client from a config mapping.

    Options may be nested under `conf` or given as flat keys next to
    `type` and `address`; nested keys win.
    """
    metrics_conf = dict(metrics_conf or {})
    source_type = str(metrics_conf.pop("type", SOURCE_TYPE_PROMETHEUS) or SOURCE_TYPE_PROMETHEUS).lower()
    address = metrics_conf.pop("address", "")
    nested = metrics_conf.pop("conf", None) or {}

    options = {str(k): str(v).lower() if isinstance(v, bool) else str(v) for k, v in metrics_conf.items()}
    options.update({str(k): str(v).lower() if isinstance(v, bool) else str(v) for k, v in nested.items()})

    if source_type == SOURCE_TYPE_PROMETHEUS:
        from nodeusage.lib.metrics.prometheus_client import PrometheusMetricsClient
        return PrometheusMetricsClient(address, options)

    raise UnsupportedSourceError(source_type)
