"""
Unit Tests for Operating Expense and Cash Flow Calculators
"""

from decimal import Decimal

import pytest

from roi_engine.calculators.cash_flow import CashFlowCalculator
from roi_engine.calculators.expenses import OperatingExpenseCalculator
from roi_engine.models import EvaluationContext, FinancialInputs, Financing, OperatingExpenses


class TestOperatingExpenses:
    """Test monthly expense derivation."""

    @pytest.fixture
    def calculator(self):
        return OperatingExpenseCalculator()

    def test_annual_costs_become_monthly(self, calculator):
        """$2,400 taxes → $200/month, $1,200 insurance → $100/month"""
        result = calculator.calculate(self._make_context(annual_taxes=2400, annual_insurance=1200))

        assert result.monthly_taxes == Decimal("200")
        assert result.monthly_insurance == Decimal("100")

    def test_maintenance_vacancy_is_percent_of_rent(self, calculator):
        """10% of $1,800 rent = $180"""
        result = calculator.calculate(self._make_context(rent=1800, maintenance_pct=10))
        assert result.maintenance_vacancy_amount == Decimal("180")

    def test_total_includes_mortgage_and_all_components(self, calculator):
        """Total = mortgage + taxes + insurance + HOA + maintenance + other"""
        result = calculator.calculate(
            self._make_context(
                rent=2000,
                annual_taxes=3600,
                annual_insurance=1800,
                hoa=150,
                maintenance_pct=5,
                other=75,
                mortgage=1100,
            )
        )

        # 1100 + 300 + 150 + 150 + 100 + 75
        assert result.total_monthly_expenses == Decimal("1875")

    def test_no_expenses(self, calculator):
        result = calculator.calculate(self._make_context())
        assert result.total_monthly_expenses == Decimal("0")

    def _make_context(
        self,
        rent: float = 1800,
        annual_taxes: float = 0,
        annual_insurance: float = 0,
        hoa: float = 0,
        maintenance_pct: float = 0,
        other: float = 0,
        mortgage: float = 0,
    ) -> EvaluationContext:
        """Helper to create EvaluationContext for expense tests."""
        inputs = FinancialInputs(
            purchase_price=Decimal("200000"),
            monthly_rent=Decimal(str(rent)),
            annual_taxes=Decimal(str(annual_taxes)),
            annual_insurance=Decimal(str(annual_insurance)),
            monthly_hoa=Decimal(str(hoa)),
            maintenance_vacancy_percent=Decimal(str(maintenance_pct)),
            other_monthly_expenses=Decimal(str(other)),
        )
        ctx = EvaluationContext(inputs=inputs)
        # Pre-populate financing (required for the total)
        ctx.financing = Financing(monthly_mortgage_payment=Decimal(str(mortgage)))
        return ctx


class TestCashFlow:
    """Test cash flow after all expenses."""

    @pytest.fixture
    def calculator(self):
        return CashFlowCalculator()

    def test_positive_cash_flow(self, calculator):
        """$1,800 rent - $1,500 expenses = $300/month, $3,600/year"""
        result = calculator.calculate(self._make_context(rent=1800, total_expenses=1500))

        assert result.monthly_cash_flow == Decimal("300")
        assert result.annual_cash_flow == Decimal("3600")

    def test_negative_cash_flow_is_not_floored(self, calculator):
        """$1,200 rent - $1,450 expenses = -$250/month"""
        result = calculator.calculate(self._make_context(rent=1200, total_expenses=1450))

        assert result.monthly_cash_flow == Decimal("-250")
        assert result.annual_cash_flow == Decimal("-3000")

    def test_annual_is_twelve_times_monthly(self, calculator):
        result = calculator.calculate(self._make_context(rent=1234.56, total_expenses=987.65))
        assert result.annual_cash_flow == result.monthly_cash_flow * 12

    def _make_context(self, rent: float, total_expenses: float) -> EvaluationContext:
        inputs = FinancialInputs(purchase_price=Decimal("200000"), monthly_rent=Decimal(str(rent)))
        ctx = EvaluationContext(inputs=inputs)
        ctx.expenses = OperatingExpenses(total_monthly_expenses=Decimal(str(total_expenses)))
        return ctx
