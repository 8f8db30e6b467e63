"""Tests for YAML configuration loading."""

from nodeusage.core import config
from nodeusage.core.config_loader import load_metrics_conf, load_yaml


def test_load_yaml_returns_empty_dict_for_missing_file(tmp_path):
    assert load_yaml(tmp_path / "missing.yml") == {}


def test_load_yaml_returns_empty_dict_for_empty_file(tmp_path):
    path = tmp_path / "empty.yml"
    path.write_text("")

    assert load_yaml(path) == {}


def test_metrics_section_overrides_environment_defaults(tmp_path):
    path = tmp_path / "metrics.yml"
    path.write_text(
        """
metrics:
  type: prometheus
  address: https://prometheus.monitoring:9090
  conf:
    tls.insecureSkipVerify: "true"
""".lstrip()
    )

    conf = load_metrics_conf(path)

    assert conf["type"] == "prometheus"
    assert conf["address"] == "https://prometheus.monitoring:9090"
    assert conf["conf"]["tls.insecureSkipVerify"] == "true"


def test_top_level_block_is_accepted(tmp_path):
    path = tmp_path / "metrics.yml"
    path.write_text("address: http://prom:9090\n")

    assert load_metrics_conf(path)["address"] == "http://prom:9090"


def test_missing_file_falls_back_to_environment(tmp_path):
    conf = load_metrics_conf(tmp_path / "missing.yml")

    assert conf["address"] == config.PROMETHEUS_ADDRESS
    assert conf["conf"]["tls.insecureSkipVerify"] == config.PROMETHEUS_INSECURE_SKIP_VERIFY
