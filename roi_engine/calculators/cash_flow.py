"""
Cash Flow Calculator

Calculates what the owner keeps after every monthly expense, debt service
included. Negative cash flow is a valid result and is not floored.
"""

from ..models import CashFlow, EvaluationContext


class CashFlowCalculator:
    """Calculates monthly and annual cash flow."""

    def calculate(self, ctx: EvaluationContext) -> CashFlow:
        monthly = ctx.inputs.monthly_rent - ctx.expenses.total_monthly_expenses
        return CashFlow(monthly_cash_flow=monthly, annual_cash_flow=monthly * 12)
