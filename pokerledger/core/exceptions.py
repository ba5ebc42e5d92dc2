"""Custom exception classes for consistent error handling across the application."""

from dataclasses import dataclass, field
from typing import Self, TypeAlias

# Shared type alias for error detail values
ErrorDetails: TypeAlias = dict[
    str, str | int | float | bool | list[str] | list[dict[str, str | int]] | None
]


@dataclass
class AppError(Exception):
    """Base exception for all application errors."""

    code: str = "app_error"
    message: str = "An application error occurred"
    details: ErrorDetails = field(default_factory=dict)

    def __str__(self) -> str:  # pyright: ignore[reportImplicitOverride]
        return self.message


@dataclass
class NotFoundError(AppError):
    """Raised when a requested resource is not found."""

    code: str = "not_found"
    message: str = "Resource not found"


@dataclass
class ValidationError(AppError):
    """Raised when domain validation fails."""

    code: str = "validation_error"
    message: str = "Validation failed"


@dataclass
class ImbalanceError(ValidationError):
    """Raised when a table's buy-ins and cash-outs do not add up.

    The caller is expected to correct the figures and try again; the totals
    are carried so the message can say by how much the table is off.
    """

    code: str = "imbalance"
    message: str = "Table imbalance"
    buy_in_total: float = 0.0
    cash_out_total: float = 0.0
    difference: float = 0.0

    @classmethod
    def from_totals(cls, buy_in_total: float, cash_out_total: float) -> Self:
        """Build the error from the two table totals."""
        difference = cash_out_total - buy_in_total
        return cls(
            message=(
                f"Table imbalance! Buy-ins: {buy_in_total:.2f}, "
                + f"Cash-outs: {cash_out_total:.2f}. Difference: {difference:.2f}"
            ),
            details={
                "buy_in_total": buy_in_total,
                "cash_out_total": cash_out_total,
                "difference": difference,
            },
            buy_in_total=buy_in_total,
            cash_out_total=cash_out_total,
            difference=difference,
        )


@dataclass
class ConflictError(AppError):
    """Raised when an operation conflicts with existing state."""

    code: str = "conflict"
    message: str = "Resource conflict"


@dataclass
class InternalError(AppError):
    """Raised for unexpected internal errors."""

    code: str = "internal_error"
    message: str = "Internal server error"
