"""
Domain Models for the Rental ROI Engine

These dataclasses provide type-safe representations of the deal inputs,
the intermediate step results and the final metrics.
All monetary and percent values use Decimal for precision.
"""

import re
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from enum import Enum

ZERO = Decimal("0")

# Inputs are read as at most 10 integer digits and 4 decimal places
MAX_ADJUSTED_EXPONENT = 9
INPUT_QUANTUM = Decimal("0.0001")

# =============================================================================
# INPUT NORMALIZATION
# =============================================================================

_NUMBER_DECORATION = re.compile(r"[\s$,%]")


def to_decimal(value) -> Decimal:
    """
    Coerce a raw form/API value to a non-negative finite Decimal.

    Empty, non-numeric, non-finite and negative values all become 0, and so
    do values of ten billion or more. Anything finer than four decimal
    places is rounded half up.
    """
    if value is None or isinstance(value, bool):
        return ZERO
    if isinstance(value, str):
        value = _NUMBER_DECORATION.sub("", value)
        if not value:
            return ZERO
    try:
        number = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return ZERO
    if not number.is_finite() or number < 0:
        return ZERO
    if not number:
        return ZERO
    if number.adjusted() > MAX_ADJUSTED_EXPONENT:
        return ZERO
    if number.as_tuple().exponent < INPUT_QUANTUM.as_tuple().exponent:
        number = number.quantize(INPUT_QUANTUM, rounding=ROUND_HALF_UP)
    return number


# Canonical field -> accepted keys, first match wins.
# Legacy keys are the form identifiers of the original browser tool.
FIELD_ALIASES = {
    "purchase_price": ("purchasePrice", "purchase_price"),
    "down_payment_percent": ("downPaymentPercent", "down_payment_percent", "downPayment"),
    "interest_rate": ("interestRate", "interest_rate"),
    "loan_term_years": ("loanTermYears", "loan_term_years", "loanTerm"),
    "monthly_rent": ("monthlyRent", "monthly_rent"),
    "annual_taxes": ("annualTaxes", "annual_taxes"),
    "annual_insurance": ("annualInsurance", "annual_insurance"),
    "monthly_hoa": ("monthlyHOA", "monthly_hoa"),
    "other_monthly_expenses": ("otherMonthlyExpenses", "other_monthly_expenses", "otherMonthly"),
    "maintenance_vacancy_percent": (
        "maintenanceVacancyPercent",
        "maintenance_vacancy_percent",
        "maintenancePercent",
    ),
    "closing_costs_percent": ("closingCostsPercent", "closing_costs_percent"),
    "upfront_repairs": ("upfrontRepairs", "upfront_repairs"),
}


def _lookup(data: dict, keys: tuple):
    for key in keys:
        if key in data:
            return data[key]
    return None


# =============================================================================
# INPUT MODELS
# =============================================================================


@dataclass(frozen=True)
class FinancialInputs:
    """Assumptions for one rental purchase. Percent fields are 0-100, not fractions."""

    purchase_price: Decimal = ZERO
    down_payment_percent: Decimal = ZERO
    interest_rate: Decimal = ZERO  # nominal annual percent
    loan_term_years: int = 0
    monthly_rent: Decimal = ZERO
    annual_taxes: Decimal = ZERO
    annual_insurance: Decimal = ZERO
    monthly_hoa: Decimal = ZERO
    other_monthly_expenses: Decimal = ZERO
    maintenance_vacancy_percent: Decimal = ZERO  # percent of monthly rent
    closing_costs_percent: Decimal = ZERO  # percent of purchase price
    upfront_repairs: Decimal = ZERO
    property_label: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "FinancialInputs":
        values = {name: to_decimal(_lookup(data, keys)) for name, keys in FIELD_ALIASES.items()}
        values["loan_term_years"] = int(values["loan_term_years"])
        label = data.get("propertyLabel", data.get("property_label")) or ""
        return cls(property_label=str(label).strip(), **values)

    def to_dict(self) -> dict:
        """camelCase shape, the same one from_dict reads back."""
        result = {}
        for name, keys in FIELD_ALIASES.items():
            value = getattr(self, name)
            result[keys[0]] = value if isinstance(value, int) else str(value)
        result["propertyLabel"] = self.property_label
        return result


# =============================================================================
# STEP RESULT MODELS
# =============================================================================


@dataclass
class Financing:
    """Down payment, loan and amortized mortgage payment."""

    down_payment_amount: Decimal = ZERO
    loan_amount: Decimal = ZERO
    monthly_rate: Decimal = ZERO
    number_of_payments: int = 0
    monthly_mortgage_payment: Decimal = ZERO


@dataclass
class OperatingExpenses:
    """Monthly carrying costs, mortgage included in the total."""

    monthly_taxes: Decimal = ZERO
    monthly_insurance: Decimal = ZERO
    monthly_hoa: Decimal = ZERO
    maintenance_vacancy_amount: Decimal = ZERO
    other_monthly_expenses: Decimal = ZERO
    total_monthly_expenses: Decimal = ZERO


@dataclass
class CashFlow:
    monthly_cash_flow: Decimal = ZERO
    annual_cash_flow: Decimal = ZERO


@dataclass
class Returns:
    """Unlevered (cap rate) and levered (cash-on-cash) yields."""

    annual_operating_expenses: Decimal = ZERO
    annual_net_operating_income: Decimal = ZERO
    cap_rate_percent: Decimal = ZERO
    closing_costs_amount: Decimal = ZERO
    total_cash_invested: Decimal = ZERO
    cash_on_cash_return_percent: Decimal = ZERO


class VerdictCategory(str, Enum):
    STRONG = "Strong"
    DECENT = "Decent"
    BORDERLINE = "Borderline"
    NEGATIVE = "Negative"


@dataclass(frozen=True)
class Verdict:
    category: VerdictCategory
    label: str
    explanation: str


@dataclass
class EvaluationContext:
    """
    Holds all intermediate state during a deal evaluation.
    This is the "bag" that flows through the pipeline.
    """

    # Input (immutable during evaluation)
    inputs: FinancialInputs

    # Step results (populated as we go)
    financing: Financing = field(default_factory=Financing)
    expenses: OperatingExpenses = field(default_factory=OperatingExpenses)
    cash_flow: CashFlow = field(default_factory=CashFlow)
    returns: Returns = field(default_factory=Returns)
    verdict: Verdict | None = None


# =============================================================================
# OUTPUT / RESULT MODELS
# =============================================================================


@dataclass(frozen=True)
class DealMetrics:
    """Final output of a deal evaluation."""

    down_payment_amount: Decimal
    loan_amount: Decimal
    monthly_mortgage_payment: Decimal
    monthly_taxes: Decimal
    monthly_insurance: Decimal
    monthly_hoa: Decimal
    maintenance_vacancy_amount: Decimal
    other_monthly_expenses: Decimal
    total_monthly_expenses: Decimal
    monthly_cash_flow: Decimal
    annual_cash_flow: Decimal
    annual_operating_expenses: Decimal
    annual_net_operating_income: Decimal
    cap_rate_percent: Decimal
    closing_costs_amount: Decimal
    total_cash_invested: Decimal
    cash_on_cash_return_percent: Decimal
    verdict: Verdict

    @classmethod
    def from_context(cls, ctx: EvaluationContext) -> "DealMetrics":
        financing = ctx.financing
        expenses = ctx.expenses
        returns = ctx.returns
        return cls(
            down_payment_amount=financing.down_payment_amount,
            loan_amount=financing.loan_amount,
            monthly_mortgage_payment=financing.monthly_mortgage_payment,
            monthly_taxes=expenses.monthly_taxes,
            monthly_insurance=expenses.monthly_insurance,
            monthly_hoa=expenses.monthly_hoa,
            maintenance_vacancy_amount=expenses.maintenance_vacancy_amount,
            other_monthly_expenses=expenses.other_monthly_expenses,
            total_monthly_expenses=expenses.total_monthly_expenses,
            monthly_cash_flow=ctx.cash_flow.monthly_cash_flow,
            annual_cash_flow=ctx.cash_flow.annual_cash_flow,
            annual_operating_expenses=returns.annual_operating_expenses,
            annual_net_operating_income=returns.annual_net_operating_income,
            cap_rate_percent=returns.cap_rate_percent,
            closing_costs_amount=returns.closing_costs_amount,
            total_cash_invested=returns.total_cash_invested,
            cash_on_cash_return_percent=returns.cash_on_cash_return_percent,
            verdict=ctx.verdict,
        )
