"""Unified exception taxonomy.

Every domain exception inherits from ``RoofMeasureError`` and carries
structured context fields so callers (UI layer, report jobs, logs) can
present or route failures consistently.

Taxonomy categories
-------------------
- ``ValidationError``   — bad polygon, pitch or coordinate input, never retryable.
- ``TransientError``    — network or service hiccups, retryable by the caller.
- ``PermanentError``    — lookups that will not succeed on retry (no address match).
- ``ContractError``     — external payloads that no longer match our models.
"""

from __future__ import annotations


class RoofMeasureError(Exception):
    """Base exception for all roof-measurement errors.

    Attributes:
        message: Human-readable error description.
        stage: Stage where the error occurred
            (e.g. ``"geometry"``, ``"geocoding"``).
        code: Machine-readable error code (e.g. ``"INVALID_POLYGON"``).
        retryable: Whether the caller may retry the operation.
    """

    #: Default stage for subclasses (override via class attribute or kwarg).
    default_stage: str = ""
    #: Default code for subclasses (override via class attribute or kwarg).
    default_code: str = ""

    def __init__(
        self,
        message: str = "",
        *,
        stage: str = "",
        code: str = "",
        retryable: bool = False,
    ) -> None:
        self.message = message
        self.stage = stage or self.default_stage
        self.code = code or self.default_code
        self.retryable = retryable
        super().__init__(message)

    @property
    def category(self) -> str:
        """Return the error category based on concrete class."""
        if isinstance(self, ContractError):
            return "contract"
        if isinstance(self, ValidationError):
            return "validation"
        if isinstance(self, TransientError):
            return "transient"
        if isinstance(self, PermanentError):
            return "permanent"
        return "transient" if self.retryable else "permanent"


# ---------------------------------------------------------------------------
# Category base classes
# ---------------------------------------------------------------------------


class ValidationError(RoofMeasureError):
    """Input validation failure. Never retryable."""

    def __init__(self, message: str = "", **kwargs: object) -> None:
        kwargs.setdefault("retryable", False)
        super().__init__(message, **kwargs)  # type: ignore[arg-type]


class TransientError(RoofMeasureError):
    """Temporary failure that may succeed on retry."""

    def __init__(self, message: str = "", **kwargs: object) -> None:
        kwargs.setdefault("retryable", True)
        super().__init__(message, **kwargs)  # type: ignore[arg-type]


class PermanentError(RoofMeasureError):
    """Unrecoverable failure. Not retryable."""

    def __init__(self, message: str = "", **kwargs: object) -> None:
        kwargs.setdefault("retryable", False)
        super().__init__(message, **kwargs)  # type: ignore[arg-type]


class ContractError(RoofMeasureError):
    """External payload no longer matches the expected schema. Never retryable."""

    def __init__(self, message: str = "", **kwargs: object) -> None:
        kwargs.setdefault("retryable", False)
        super().__init__(message, **kwargs)  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# Geometry input errors
# ---------------------------------------------------------------------------


class InvalidCoordinateError(ValidationError):
    """A latitude/longitude is non-finite or outside the WGS 84 range."""

    default_stage = "geometry"
    default_code = "INVALID_COORDINATE"


class InvalidPolygonError(ValidationError):
    """A polygon has fewer than three distinct vertices."""

    default_stage = "geometry"
    default_code = "INVALID_POLYGON"


class InvalidPitchError(ValidationError):
    """A pitch angle is non-finite or outside ``[0, 90)`` degrees."""

    default_stage = "geometry"
    default_code = "INVALID_PITCH"
