from rxquant.calculation.models import ErrorType


class PipelineError(Exception):
    """Base exception for calculation pipeline errors."""


class StageFailure(PipelineError):
    """Raised by a pipeline step to abort the calculation with an Error result."""

    def __init__(
        self,
        error_type: ErrorType,
        message: str,
        context: dict[str, object] | None = None,
    ) -> None:
        super().__init__(message)
        self.error_type = error_type
        self.message = message
        self.context = context or {}
