"""
prometheus_client.py
- Queries Prometheus for per-node average CPU and memory usage.
- Used by scheduler usage scoring to weigh placement decisions.

Every per-metric failure degrades to a zero value; only an address that
cannot back an HTTP client is raised to the caller.
"""

import json
import threading
import time
from urllib.parse import urlsplit

import requests
from loguru import logger

from nodeusage.core.constants import QUERY_API_PATH, READ_CHUNK_SIZE
from nodeusage.lib.metrics.exceptions import InvalidEndpointError
from nodeusage.lib.metrics.models import FetcherConfig, NodeMetrics, UsageMetric
from nodeusage.lib.metrics.query import build_query, first_sample_value, parse_value, render_vector, result_rows
from nodeusage.lib.metrics.source import MetricsClient

query_requests_total = 0
query_errors_total = 0
empty_results_total = 0
parse_failures_total = 0
_counter_lock = threading.Lock()


class QueryError(Exception):
    """A single instant query failed at the transport or API level."""


class PrometheusMetricsClient(MetricsClient):
    """Fetches usage averages from the recording rules `<metric>_<period>`."""

    def __init__(self, address, conf=None):
        self.config = FetcherConfig(address=address, conf=conf or {})

    @property
    def address(self):
        return self.config.address

    def _query_url(self):
        try:
            parts = urlsplit(self.address or "")
            # Accessing .port validates it.
            parts.port
        except ValueError as e:
            raise InvalidEndpointError(self.address, str(e)) from e
        if parts.scheme not in ("http", "https"):
            raise InvalidEndpointError(self.address, "scheme must be http or https")
        if not parts.hostname:
            raise InvalidEndpointError(self.address, "missing host")
        return self.address.rstrip("/") + QUERY_API_PATH

    def _new_session(self):
        session = requests.Session()
        session.verify = not self.config.insecure_skip_verify
        return session

    def _query(self, session, url, query, deadline=None):
        """
        Run one instant query evaluated at the current time.

        The body is streamed so the deadline also bounds a slow response,
        not only the connect and per-read socket timeouts.

        Returns:
            tuple(dict, list): decoded response body and advisory warnings.

        Raises:
            QueryError: on transport failure, deadline expiry, non-2xx status or an error payload.
        """
        global query_requests_total

        timeout = None
        if deadline is not None:
            timeout = deadline - time.monotonic()
            if timeout <= 0:
                raise QueryError(f"deadline exceeded before querying {query}")

        with _counter_lock:
            query_requests_total += 1

        params = {"query": query, "time": f"{time.time():.3f}"}
        try:
            response = session.get(url, params=params, timeout=timeout, stream=True)
            try:
                chunks = []
                for chunk in response.iter_content(chunk_size=READ_CHUNK_SIZE):
                    if deadline is not None and time.monotonic() > deadline:
                        raise QueryError(f"deadline exceeded while reading response for {query}")
                    chunks.append(chunk)
            finally:
                response.close()
            payload = json.loads(b"".join(chunks))
        except (requests.RequestException, ValueError) as e:
            raise QueryError(str(e)) from e

        if not isinstance(payload, dict):
            raise QueryError(f"unexpected response body from {url}")
        if not response.ok or payload.get("status") == "error":
            raise QueryError(
                f"HTTP {response.status_code}: {payload.get('errorType', 'error')}: {payload.get('error', '')}"
            )
        warnings = payload.get("warnings")
        return payload, warnings if isinstance(warnings, list) else []

    def node_metrics_avg(self, node_name, period, timeout=None):
        """
        Return the average CPU and memory usage of a node over `period`.

        Args:
            node_name (str): Node name as carried in the `instance` label.
            period (str): Recording rule window, e.g. "5m".
            timeout (float | None): Deadline in seconds for the whole call.

        Returns:
            NodeMetrics: best-effort values; unavailable fields stay 0.0.

        Raises:
            InvalidEndpointError: if the configured address cannot back a client.
        """
        global query_errors_total, empty_results_total, parse_failures_total

        logger.debug(f"[prometheus] Get node metrics from Prometheus: {self.address}")
        url = self._query_url()
        deadline = time.monotonic() + timeout if timeout is not None else None
        node_metrics = NodeMetrics()

        with self._new_session() as session:
            for metric in UsageMetric:
                query = build_query(metric, period, node_name)
                logger.debug(f"[prometheus] Query prometheus by {query}")

                try:
                    payload, warnings = self._query(session, url, query, deadline)
                except QueryError as e:
                    with _counter_lock:
                        query_errors_total += 1
                    logger.error(f"[prometheus] Error querying Prometheus: {e}")
                    continue

                if warnings:
                    logger.info(f"[prometheus] Warning querying Prometheus: {warnings}")

                _, result = result_rows(payload)
                if not result:
                    with _counter_lock:
                        empty_results_total += 1
                    logger.warning(f"[prometheus] No data found for {query}")
                    continue

                token = first_sample_value(payload)
                if token is None:
                    continue

                value = parse_value(token)
                if value is None:
                    with _counter_lock:
                        parse_failures_total += 1
                    logger.opt(lazy=True).debug(
                        "[prometheus] Unparseable value {} for {}:\n{}",
                        lambda: repr(token), lambda: query, lambda: render_vector(result),
                    )
                    continue

                setattr(node_metrics, metric.field_name, value)

        return node_metrics
