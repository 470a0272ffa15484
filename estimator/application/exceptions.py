from typing import Any


class CrmTransportError(RuntimeError):
    """Raised when the CRM cannot be reached (timeouts, connection errors). Safe to retry."""
    pass


class CrmUpstreamError(RuntimeError):
    """Raised when the CRM answers with an error status."""

    def __init__(self, message: str, status: int, body: Any = None) -> None:
        super().__init__(message)
        self.status = status
        self.body = body


class CrmContractError(RuntimeError):
    """Raised when a CRM response is missing data we depend on (e.g. contact id)."""
    pass


class CrmConfigurationError(RuntimeError):
    """Raised when CRM credentials or location are not configured."""
    pass


class CatalogLintError(RuntimeError):
    """Raised by the strict catalog check when references dangle."""

    def __init__(self, problems: list[str]) -> None:
        super().__init__("Catalog has dangling references: " + "; ".join(problems))
        self.problems = problems
