"""
query.py
- Builds the per-node PromQL expressions for the usage recording rules.
- Extracts the first sample value from a Prometheus instant-query response.

Response shape (GET /api/v1/query):
    {"status": "success",
     "data": {"resultType": "vector",
              "result": [{"metric": {...}, "value": [<ts>, "<value>"]}, ...]},
     "warnings": [...]}
"""

from loguru import logger

from nodeusage.core.constants import RESULT_TYPE_VECTOR


def _escape_label_value(value):
    return value.replace("\\", "\\\\").replace('"', '\\"')


def build_query(metric, period, node_name):
    """
    Render the instant query for one usage metric on one node.

    Args:
        metric (UsageMetric | str): Recording rule name (e.g. cpu_usage_avg)
        period (str): Rule window suffix (e.g. 5m)
        node_name (str): Value of the `instance` label

    Returns:
        str: e.g. cpu_usage_avg_5m{instance="worker-1"}
    """
    name = getattr(metric, "value", metric)
    return f'{name}_{period}{{instance="{_escape_label_value(node_name)}"}}'


def result_rows(payload):
    """
    Return (resultType, result) from a decoded response body.

    Any section that is not shaped as documented comes back as None so that
    callers treat it as missing data.
    """
    data = payload.get("data") if isinstance(payload, dict) else None
    if not isinstance(data, dict):
        return None, None
    result = data.get("result")
    return data.get("resultType"), result if isinstance(result, list) else None


def render_vector(result):
    """
    Render vector rows as `{labels} => <value> @<timestamp>`, one per line.
    Rows that do not carry a [timestamp, value] pair are rendered from whatever they hold.
    """
    lines = []
    for row in result or []:
        if not isinstance(row, dict):
            lines.append(str(row))
            continue
        metric = row.get("metric")
        labels = ", ".join(f'{k}="{v}"' for k, v in sorted(metric.items())) if isinstance(metric, dict) else ""
        value = row.get("value")
        if isinstance(value, (list, tuple)) and len(value) == 2:
            lines.append(f"{{{labels}}} => {value[1]} @[{value[0]}]")
        else:
            lines.append(f"{{{labels}}} => {value}")
    return "\n".join(lines)


def _token_from_text(rendered):
    first_row = rendered.split("\n")[0].strip()
    if "=>" not in first_row:
        return None
    tokens = first_row.split("=>", 1)[1].strip().split()
    return tokens[0] if tokens else None


def first_sample_value(payload):
    """
    Return the raw value token of the first vector sample, or None.

    Non-vector results and empty results yield None; the caller leaves the
    corresponding field at zero.
    """
    result_type, result = result_rows(payload)

    if not result:
        return None

    if result_type != RESULT_TYPE_VECTOR:
        logger.debug(f"[prometheus] Ignoring result of type {result_type!r}, expected vector")
        return None

    first = result[0]
    value = first.get("value") if isinstance(first, dict) else None
    if isinstance(value, (list, tuple)) and len(value) == 2:
        return str(value[1])

    # Unexpected row shape: fall back to the textual rendering.
    return _token_from_text(render_vector(result))


def parse_value(token):
    """Parse a sample value token as float. Returns None if it is not a number."""
    try:
        return float(token)
    except (TypeError, ValueError):
        return None
