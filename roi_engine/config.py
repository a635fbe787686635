"""
Runtime configuration for the Rental ROI Engine.

Values come from environment variables so the same code runs under
Flask (main.py) and AWS Lambda (lambda_handler.py).
"""

import os
from dataclasses import dataclass
from decimal import Decimal

# Environment (dev, staging, prod)
ENVIRONMENT = os.environ.get("ENVIRONMENT", "dev")

# Directory holding one last-inputs file per client id
STORE_DIR = os.environ.get("ROI_STORE_DIR", "data/last_inputs")

# Newsletter provider (Beehiiv)
BEEHIIV_API_KEY = os.environ.get("BEEHIIV_API_KEY")
BEEHIIV_PUBLICATION_ID = os.environ.get("BEEHIIV_PUBLICATION_ID", "ebbe4851-b5f1-47ab-b1a7-a056b51f17cd")
BEEHIIV_BASE_URL = os.environ.get("BEEHIIV_BASE_URL", "https://api.beehiiv.com/v2")


def _env_decimal(name: str, default: str) -> Decimal:
    raw = os.environ.get(name, default)
    try:
        value = Decimal(raw)
    except ArithmeticError as e:
        raise ValueError(f"{name} must be numeric, got: {raw!r}") from e
    if not value.is_finite():
        raise ValueError(f"{name} must be a finite number, got: {raw!r}")
    return value


@dataclass(frozen=True)
class VerdictPolicy:
    """
    Thresholds for verdict classification.

    Percent thresholds apply to cash-on-cash return, cash flow thresholds
    to monthly cash flow in currency units.
    """

    strong_min_coc: Decimal = Decimal("12")
    decent_min_coc: Decimal = Decimal("8")
    strong_min_cash_flow: Decimal = Decimal("0")  # exclusive
    decent_min_cash_flow: Decimal = Decimal("0")  # inclusive

    @classmethod
    def from_env(cls) -> "VerdictPolicy":
        return cls(
            strong_min_coc=_env_decimal("ROI_STRONG_MIN_COC", "12"),
            decent_min_coc=_env_decimal("ROI_DECENT_MIN_COC", "8"),
            strong_min_cash_flow=_env_decimal("ROI_STRONG_MIN_CASH_FLOW", "0"),
            decent_min_cash_flow=_env_decimal("ROI_DECENT_MIN_CASH_FLOW", "0"),
        )
