"""
models.py
- Value types shared by the metrics clients:
    - FetcherConfig: endpoint address plus option map, read-only after construction
    - NodeMetrics: per-node average CPU and memory usage ratios
    - UsageMetric: the recording rules queried for each node
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping

from nodeusage.core.constants import TLS_INSECURE_SKIP_VERIFY


class UsageMetric(str, Enum):
    """Recording rule names defined in the Prometheus rules, in query order."""

    CPU_USAGE_AVG = "cpu_usage_avg"
    MEM_USAGE_AVG = "mem_usage_avg"

    @property
    def field_name(self) -> str:
        """NodeMetrics attribute populated by this metric."""
        return "cpu" if self is UsageMetric.CPU_USAGE_AVG else "memory"


@dataclass(frozen=True)
class FetcherConfig:
    address: str
    conf: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        # Copy so later mutation of the caller's dict cannot leak in.
        object.__setattr__(self, "conf", MappingProxyType(dict(self.conf or {})))

    @property
    def insecure_skip_verify(self) -> bool:
        return self.conf.get(TLS_INSECURE_SKIP_VERIFY) == "true"


@dataclass
class NodeMetrics:
    cpu: float = 0.0
    memory: float = 0.0

    def as_dict(self):
        return {"cpu": self.cpu, "memory": self.memory}
