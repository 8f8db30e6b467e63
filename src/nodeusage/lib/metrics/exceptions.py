"""
exceptions.py
- Errors raised by the metrics source layer.
- Only construction problems surface to callers; per-query failures are logged and absorbed.
"""


class MetricsClientError(Exception):
    """Base error for metrics source failures."""


class InvalidEndpointError(MetricsClientError):
    """The HTTP client cannot be built for the configured address."""

    def __init__(self, address, reason):
        self.address = address
        self.reason = reason
        super().__init__(f"invalid metrics endpoint {address!r}: {reason}")


class UnsupportedSourceError(MetricsClientError):
    """The configured metrics source type has no client implementation."""

    def __init__(self, source_type):
        self.source_type = source_type
        super().__init__(f"unsupported metrics source type: {source_type!r}")
