"""
Input Validation for the Rental ROI Engine

Checks that a deal carries enough data to evaluate before any step runs.
Purchase price and monthly rent anchor every downstream ratio; all other
inputs may legitimately be zero (all-cash purchase, 0% loan, no HOA...).
"""

from .models import FinancialInputs


class InsufficientDataError(ValueError):
    """Raised when a deal lacks a positive purchase price or monthly rent."""


class InputValidator:
    """Validates financial inputs according to business rules."""

    def validate(self, inputs: FinancialInputs) -> None:
        """
        Run all validations. Raises InsufficientDataError if any check fails.
        """
        missing = []
        if inputs.purchase_price <= 0:
            missing.append(f"purchase_price must be positive, got: {inputs.purchase_price}")
        if inputs.monthly_rent <= 0:
            missing.append(f"monthly_rent must be positive, got: {inputs.monthly_rent}")

        if missing:
            raise InsufficientDataError("; ".join(missing))
