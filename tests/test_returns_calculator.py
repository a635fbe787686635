"""
Unit Tests for Returns Calculator

Cap rate excludes financing, cash-on-cash includes it.
"""

from decimal import Decimal

import pytest

from roi_engine.calculators.returns import ReturnsCalculator
from roi_engine.models import CashFlow, EvaluationContext, FinancialInputs, Financing, OperatingExpenses


class TestNetOperatingIncome:
    """Test NOI and cap rate."""

    @pytest.fixture
    def calculator(self):
        return ReturnsCalculator()

    def test_noi_excludes_mortgage(self, calculator):
        """Mortgage payment has no effect on NOI or cap rate."""
        with_loan = calculator.calculate(self._make_context(mortgage=959.28))
        all_cash = calculator.calculate(self._make_context(mortgage=0))

        assert with_loan.annual_net_operating_income == all_cash.annual_net_operating_income
        assert with_loan.cap_rate_percent == all_cash.cap_rate_percent

    def test_noi_and_cap_rate_values(self, calculator):
        """
        Rent $1,800 × 12 = $21,600
        Opex: taxes 2,400 + insurance 1,200 + maintenance 180 × 12 = $5,760
        NOI = $15,840 → cap rate on $200,000 = 7.92%
        """
        result = calculator.calculate(self._make_context())

        assert result.annual_operating_expenses == Decimal("5760")
        assert result.annual_net_operating_income == Decimal("15840")
        assert result.cap_rate_percent == Decimal("7.92")

    def test_noi_excludes_acquisition_costs(self, calculator):
        """Closing costs and repairs only move cash invested."""
        base = calculator.calculate(self._make_context(closing_pct=0, repairs=0))
        loaded = calculator.calculate(self._make_context(closing_pct=5, repairs=25000))

        assert base.annual_net_operating_income == loaded.annual_net_operating_income
        assert loaded.total_cash_invested > base.total_cash_invested

    def test_negative_noi_gives_negative_cap_rate(self, calculator):
        result = calculator.calculate(self._make_context(rent=300, annual_taxes=6000))
        assert result.annual_net_operating_income < 0
        assert result.cap_rate_percent < 0

    def _make_context(self, **kwargs) -> EvaluationContext:
        return make_returns_context(**kwargs)


class TestCashOnCash:
    """Test cash invested and cash-on-cash return."""

    @pytest.fixture
    def calculator(self):
        return ReturnsCalculator()

    def test_cash_invested_excludes_loan(self, calculator):
        """$40,000 down + 3% closing ($6,000) + $5,000 repairs = $51,000"""
        result = calculator.calculate(make_returns_context())

        assert result.closing_costs_amount == Decimal("6000")
        assert result.total_cash_invested == Decimal("51000")

    def test_cash_on_cash_value(self, calculator):
        """$5,100 annual cash flow on $51,000 invested = 10%"""
        result = calculator.calculate(make_returns_context(annual_cash_flow=5100))
        assert result.cash_on_cash_return_percent == Decimal("10")

    def test_negative_cash_flow_negative_return(self, calculator):
        result = calculator.calculate(make_returns_context(annual_cash_flow=-2550))
        assert result.cash_on_cash_return_percent == Decimal("-5")

    def test_zero_cash_invested_reports_zero(self, calculator):
        """No cash in → 0%, not infinity."""
        result = calculator.calculate(
            make_returns_context(down_payment=0, closing_pct=0, repairs=0, annual_cash_flow=6000)
        )

        assert result.total_cash_invested == Decimal("0")
        assert result.cash_on_cash_return_percent == Decimal("0")
        assert result.cash_on_cash_return_percent.is_finite()


def make_returns_context(
    price: float = 200000,
    rent: float = 1800,
    annual_taxes: float = 2400,
    annual_insurance: float = 1200,
    maintenance: float = 180,
    closing_pct: float = 3,
    repairs: float = 5000,
    down_payment: float = 40000,
    mortgage: float = 959.28,
    annual_cash_flow: float = 4328.64,
) -> EvaluationContext:
    """Helper to create EvaluationContext with the earlier steps pre-populated."""
    inputs = FinancialInputs(
        purchase_price=Decimal(str(price)),
        monthly_rent=Decimal(str(rent)),
        annual_taxes=Decimal(str(annual_taxes)),
        annual_insurance=Decimal(str(annual_insurance)),
        closing_costs_percent=Decimal(str(closing_pct)),
        upfront_repairs=Decimal(str(repairs)),
    )
    ctx = EvaluationContext(inputs=inputs)
    ctx.financing = Financing(
        down_payment_amount=Decimal(str(down_payment)),
        monthly_mortgage_payment=Decimal(str(mortgage)),
    )
    ctx.expenses = OperatingExpenses(maintenance_vacancy_amount=Decimal(str(maintenance)))
    ctx.cash_flow = CashFlow(
        monthly_cash_flow=Decimal(str(annual_cash_flow)) / 12,
        annual_cash_flow=Decimal(str(annual_cash_flow)),
    )
    return ctx
