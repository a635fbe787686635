"""
Output Builder

Constructs the API response from evaluated inputs and metrics.
Rounding happens here only; the engine keeps full precision.
"""

from decimal import ROUND_HALF_UP, Decimal, localcontext

from .models import DealMetrics, FinancialInputs

CENTS = Decimal("0.01")

# Enough digits to quantize the largest ratio sanitized inputs can produce
ROUNDING_PRECISION = 60


def round_half_up(value: Decimal, quantum: Decimal) -> Decimal:
    with localcontext() as ctx:
        ctx.prec = ROUNDING_PRECISION
        return Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP)


def to_money(value: Decimal) -> float:
    """Convert Decimal to float with 2 decimal places."""
    return float(round_half_up(value, CENTS))


def to_percent(value: Decimal) -> float:
    """Percent values are also reported with 2 decimal places."""
    return float(round_half_up(value, CENTS))


def _fmt(value) -> str:
    """Format a number as currency string for descriptions."""
    return f"${to_money(value):,.2f}"


def _pct(value) -> str:
    return f"{to_percent(value):.2f}%"


class OutputBuilder:
    """Builds the final output response."""

    def build(self, inputs: FinancialInputs, metrics: DealMetrics) -> dict:
        """Construct the complete evaluation result."""
        return {
            "property": {"label": inputs.property_label or "Unnamed property"},
            "assumptions": self._build_assumptions(inputs),
            "calculations": self._build_calculations(inputs, metrics),
            "verdict": self._build_verdict(metrics),
        }

    def _build_assumptions(self, inputs: FinancialInputs) -> dict:
        """Echo the sanitized inputs the metrics were computed from."""
        return {
            "purchase_price": to_money(inputs.purchase_price),
            "down_payment_percent": to_percent(inputs.down_payment_percent),
            "interest_rate": to_percent(inputs.interest_rate),
            "loan_term_years": inputs.loan_term_years,
            "monthly_rent": to_money(inputs.monthly_rent),
            "annual_taxes": to_money(inputs.annual_taxes),
            "annual_insurance": to_money(inputs.annual_insurance),
            "monthly_hoa": to_money(inputs.monthly_hoa),
            "other_monthly_expenses": to_money(inputs.other_monthly_expenses),
            "maintenance_vacancy_percent": to_percent(inputs.maintenance_vacancy_percent),
            "closing_costs_percent": to_percent(inputs.closing_costs_percent),
            "upfront_repairs": to_money(inputs.upfront_repairs),
        }

    def _build_calculations(self, inputs: FinancialInputs, m: DealMetrics) -> dict:
        """Build calculations section with value and dynamic description for each field."""
        price = inputs.purchase_price
        rent = inputs.monthly_rent

        if m.loan_amount <= 0:
            mortgage_desc = "No loan - all-cash purchase"
        elif inputs.loan_term_years <= 0:
            mortgage_desc = "No loan term given - mortgage payment not applicable"
        elif inputs.interest_rate == 0:
            mortgage_desc = f"{_fmt(m.loan_amount)} / {inputs.loan_term_years * 12} payments at 0% interest"
        else:
            mortgage_desc = (
                f"{_fmt(m.loan_amount)} at {_pct(inputs.interest_rate)} "
                f"over {inputs.loan_term_years} years, fully amortizing"
            )

        return {
            # Financing
            "down_payment_amount": {
                "value": to_money(m.down_payment_amount),
                "description": f"{_pct(inputs.down_payment_percent)} × {_fmt(price)} = {_fmt(m.down_payment_amount)}"
            },
            "loan_amount": {
                "value": to_money(m.loan_amount),
                "description": f"purchase_price ({_fmt(price)}) - down_payment ({_fmt(m.down_payment_amount)}), never below zero"
            },
            "monthly_mortgage_payment": {
                "value": to_money(m.monthly_mortgage_payment),
                "description": mortgage_desc
            },

            # Monthly expenses
            "monthly_taxes": {
                "value": to_money(m.monthly_taxes),
                "description": f"annual_taxes ({_fmt(inputs.annual_taxes)}) / 12"
            },
            "monthly_insurance": {
                "value": to_money(m.monthly_insurance),
                "description": f"annual_insurance ({_fmt(inputs.annual_insurance)}) / 12"
            },
            "monthly_hoa": {
                "value": to_money(m.monthly_hoa),
                "description": "HOA dues as entered"
            },
            "maintenance_vacancy_amount": {
                "value": to_money(m.maintenance_vacancy_amount),
                "description": f"{_pct(inputs.maintenance_vacancy_percent)} of rent ({_fmt(rent)}) reserved for maintenance & vacancy"
            },
            "other_monthly_expenses": {
                "value": to_money(m.other_monthly_expenses),
                "description": "Other monthly expenses as entered"
            },
            "total_monthly_expenses": {
                "value": to_money(m.total_monthly_expenses),
                "description": f"mortgage ({_fmt(m.monthly_mortgage_payment)}) + taxes ({_fmt(m.monthly_taxes)}) + insurance ({_fmt(m.monthly_insurance)}) + HOA ({_fmt(m.monthly_hoa)}) + maintenance & vacancy ({_fmt(m.maintenance_vacancy_amount)}) + other ({_fmt(m.other_monthly_expenses)})"
            },

            # Cash flow
            "monthly_cash_flow": {
                "value": to_money(m.monthly_cash_flow),
                "description": f"rent ({_fmt(rent)}) - total_monthly_expenses ({_fmt(m.total_monthly_expenses)})"
            },
            "annual_cash_flow": {
                "value": to_money(m.annual_cash_flow),
                "description": f"12 × monthly_cash_flow ({_fmt(m.monthly_cash_flow)})"
            },

            # NOI and cap rate
            "annual_operating_expenses": {
                "value": to_money(m.annual_operating_expenses),
                "description": "Taxes, insurance, HOA, maintenance & vacancy and other expenses for a year. Excludes the mortgage."
            },
            "annual_net_operating_income": {
                "value": to_money(m.annual_net_operating_income),
                "description": f"12 × rent ({_fmt(rent * 12)}) - operating expenses ({_fmt(m.annual_operating_expenses)})"
            },
            "cap_rate_percent": {
                "value": to_percent(m.cap_rate_percent),
                "description": f"NOI ({_fmt(m.annual_net_operating_income)}) / purchase_price ({_fmt(price)})"
            },

            # Cash invested and cash-on-cash
            "closing_costs_amount": {
                "value": to_money(m.closing_costs_amount),
                "description": f"{_pct(inputs.closing_costs_percent)} × {_fmt(price)}"
            },
            "total_cash_invested": {
                "value": to_money(m.total_cash_invested),
                "description": f"down_payment ({_fmt(m.down_payment_amount)}) + closing_costs ({_fmt(m.closing_costs_amount)}) + upfront_repairs ({_fmt(inputs.upfront_repairs)})"
            },
            "cash_on_cash_return_percent": {
                "value": to_percent(m.cash_on_cash_return_percent),
                "description": f"annual_cash_flow ({_fmt(m.annual_cash_flow)}) / total_cash_invested ({_fmt(m.total_cash_invested)})" if m.total_cash_invested > 0 else "No cash invested - cash-on-cash return reported as 0%"
            },
        }

    def _build_verdict(self, metrics: DealMetrics) -> dict:
        verdict = metrics.verdict
        return {
            "category": verdict.category.value,
            "label": verdict.label,
            "explanation": verdict.explanation,
        }
