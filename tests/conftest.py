"""Shared fixtures for the Prometheus usage fetcher tests."""

import json
from unittest.mock import MagicMock

import pytest
from loguru import logger


def vector_payload(value, instance="worker-1", warnings=None):
    payload = {
        "status": "success",
        "data": {
            "resultType": "vector",
            "result": [
                {"metric": {"instance": instance}, "value": [1700000000.123, value]},
            ],
        },
    }
    if warnings:
        payload["warnings"] = warnings
    return payload


def make_response(payload, status_code=200, chunks=None):
    """A streamed requests.Response stand-in; `chunks` overrides the JSON body."""
    response = MagicMock()
    response.status_code = status_code
    response.ok = status_code < 400
    if chunks is None:
        chunks = [json.dumps(payload).encode()]
    response.iter_content.return_value = chunks
    return response


@pytest.fixture
def fake_session():
    """A requests.Session stand-in usable as a context manager."""
    session = MagicMock()
    session.__enter__.return_value = session
    session.__exit__.return_value = False
    return session


@pytest.fixture
def log_records():
    """Collect loguru records emitted during the test."""
    records = []
    handler_id = logger.add(lambda message: records.append(message.record), level="DEBUG")
    yield records
    logger.remove(handler_id)
