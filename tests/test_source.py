"""Tests for building metrics clients from scheduler config."""

import pytest

from nodeusage.lib.metrics.exceptions import UnsupportedSourceError
from nodeusage.lib.metrics.prometheus_client import PrometheusMetricsClient
from nodeusage.lib.metrics.source import MetricsClient, new_metrics_client


def test_builds_prometheus_client_with_nested_options():
    client = new_metrics_client({
        "type": "prometheus",
        "address": "https://prometheus:9090",
        "conf": {"tls.insecureSkipVerify": "true"},
    })

    assert isinstance(client, PrometheusMetricsClient)
    assert isinstance(client, MetricsClient)
    assert client.address == "https://prometheus:9090"
    assert client.config.insecure_skip_verify is True


def test_defaults_to_prometheus_and_accepts_flat_options():
    client = new_metrics_client({"address": "http://prom:9090", "tls.insecureSkipVerify": True})

    assert isinstance(client, PrometheusMetricsClient)
    assert client.config.conf["tls.insecureSkipVerify"] == "true"


def test_nested_options_override_flat_ones():
    client = new_metrics_client({
        "address": "http://prom:9090",
        "tls.insecureSkipVerify": "true",
        "conf": {"tls.insecureSkipVerify": "false"},
    })

    assert client.config.insecure_skip_verify is False


def test_unknown_source_type_is_rejected():
    with pytest.raises(UnsupportedSourceError) as exc:
        new_metrics_client({"type": "elasticsearch", "address": "http://es:9200"})

    assert exc.value.source_type == "elasticsearch"


def test_abstract_contract_cannot_be_instantiated():
    with pytest.raises(TypeError):
        MetricsClient()
