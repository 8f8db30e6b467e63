"""
constants.py
- Project-wide constants shared by the metrics client and the diagnostics API.
- Includes the Prometheus query path, option keys and tuned defaults.
"""

# --- Prometheus HTTP API ---
QUERY_API_PATH = "/api/v1/query"
RESULT_TYPE_VECTOR = "vector"

# --- Option Keys ---
SOURCE_TYPE_PROMETHEUS = "prometheus"
TLS_INSECURE_SKIP_VERIFY = "tls.insecureSkipVerify"

# --- Query Defaults ---
DEFAULT_PERIOD = "5m"  # must match the recording rule suffixes
DEFAULT_QUERY_TIMEOUT = 10  # seconds, whole node_metrics_avg call
READ_CHUNK_SIZE = 8192  # bytes per streamed read, deadline checked between reads
