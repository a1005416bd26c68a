"""Error taxonomy for the analytics engine."""


class AnalyticsError(Exception):
    """Base class for analytics failures."""


class AnalyticsValidationError(AnalyticsError):
    """Raised when a caller-supplied parameter is malformed or out of range."""

    def __init__(self, parameter: str, message: str):
        self.parameter = parameter
        self.message = message
        super().__init__(f"Invalid {parameter}: {message}")


class DataIntegrityError(AnalyticsError):
    """Raised when a record violates the snapshot contract (missing created_at)."""

    def __init__(self, record_id, message: str = "record has no created_at timestamp"):
        self.record_id = record_id
        super().__init__(f"Record {record_id!r}: {message}")


class AggregationTimeout(AnalyticsError):
    """Raised when a combined aggregation misses its deadline."""

    def __init__(self, timeout: float):
        self.timeout = timeout
        super().__init__(f"Aggregation did not finish within {timeout}s")
