"""Estimator failures. Both are caller errors; nothing here is retryable."""


class EstimatorError(Exception):
    """Base class for estimator precondition violations."""


class InvalidInputError(EstimatorError, ValueError):
    """A numeric input is missing, non-finite, negative, or out of range.

    `field` holds the wire name of the offending input (e.g. "laborHours").
    """

    def __init__(self, field: str, value=None, reason: str = "is invalid"):
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"{field} {reason} (got {value!r})")


class UnknownMaterialError(EstimatorError, LookupError):
    """The selected material id is not in the catalog."""

    def __init__(self, material_id, available=None):
        self.material_id = material_id
        self.available = list(available or [])
        message = f"Unknown material: {material_id!r}"
        if self.available:
            message += f". Available: {self.available}"
        super().__init__(message)
