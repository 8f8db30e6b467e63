#!/usr/bin/env python3
"""
main.py
- Diagnostics entrypoint for the node usage fetcher.
- Serves:
    - /healthz: liveness
    - /metrics: fetcher counters in Prometheus text format
    - /nodes/{node_name}/usage: what the scheduler would see for a node
"""

import uvicorn
import sentry_sdk
from fastapi import FastAPI, HTTPException, Query
from fastapi.responses import PlainTextResponse
from loguru import logger

from nodeusage.core import config
from nodeusage.core.config_loader import load_metrics_conf
from nodeusage.lib.metrics import prometheus_client
from nodeusage.lib.metrics.exceptions import MetricsClientError
from nodeusage.lib.metrics.source import new_metrics_client

api = FastAPI()


@api.get("/healthz")
async def health():
    return {"status": "ok"}


@api.get("/nodes/{node_name}/usage")
def node_usage(node_name: str, period: str = Query(config.DEFAULT_QUERY_PERIOD)):
    try:
        client = new_metrics_client(load_metrics_conf())
        usage = client.node_metrics_avg(node_name, period, timeout=config.QUERY_TIMEOUT_SECONDS)
    except MetricsClientError as e:
        logger.error(f"[api] Cannot query usage for {node_name}: {e}")
        raise HTTPException(status_code=502, detail=str(e))
    return {"node": node_name, "period": period, **usage.as_dict()}


@api.get("/metrics")
async def metrics():
    return PlainTextResponse(
        f"""# HELP nodeusage_query_requests_total Total instant queries sent to Prometheus
# TYPE nodeusage_query_requests_total counter
nodeusage_query_requests_total {prometheus_client.query_requests_total}
# HELP nodeusage_query_errors_total Instant queries that failed or hit the deadline
# TYPE nodeusage_query_errors_total counter
nodeusage_query_errors_total {prometheus_client.query_errors_total}
# HELP nodeusage_empty_results_total Instant queries that returned no data
# TYPE nodeusage_empty_results_total counter
nodeusage_empty_results_total {prometheus_client.empty_results_total}
# HELP nodeusage_parse_failures_total Sample values that could not be parsed as float
# TYPE nodeusage_parse_failures_total counter
nodeusage_parse_failures_total {prometheus_client.parse_failures_total}
""",
        media_type="text/plain"
    )


def run():
    config.setup_logging()
    if config.SENTRY_DSN:
        sentry_sdk.init(dsn=config.SENTRY_DSN, traces_sample_rate=1.0)
    logger.info(f"[api] Serving node usage diagnostics on {config.API_HOST}:{config.API_PORT}")
    uvicorn.run(api, host=config.API_HOST, port=config.API_PORT)


if __name__ == "__main__":
    run()
