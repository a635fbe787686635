"""
Returns Calculator

Cap rate (financing-independent) and cash-on-cash return (financing-inclusive).
"""

from ..models import ZERO, EvaluationContext, Returns


class ReturnsCalculator:
    """Calculates NOI, cap rate, cash invested and cash-on-cash return."""

    def calculate(self, ctx: EvaluationContext) -> Returns:
        """
        NOI = 12 x Rent - Annual Operating Expenses (no mortgage, no acquisition costs)
        Cap Rate = 100 x NOI / Purchase Price
        Cash Invested = Down Payment + Closing Costs + Upfront Repairs
        Cash-on-Cash = 100 x Annual Cash Flow / Cash Invested
        """
        inputs = ctx.inputs

        annual_opex = (
            inputs.annual_taxes
            + inputs.annual_insurance
            + inputs.monthly_hoa * 12
            + ctx.expenses.maintenance_vacancy_amount * 12
            + inputs.other_monthly_expenses * 12
        )
        noi = inputs.monthly_rent * 12 - annual_opex
        # purchase_price > 0 is guaranteed by InputValidator
        cap_rate = noi * 100 / inputs.purchase_price

        closing_costs = inputs.purchase_price * inputs.closing_costs_percent / 100
        cash_invested = ctx.financing.down_payment_amount + closing_costs + inputs.upfront_repairs

        return Returns(
            annual_operating_expenses=annual_opex,
            annual_net_operating_income=noi,
            cap_rate_percent=cap_rate,
            closing_costs_amount=closing_costs,
            total_cash_invested=cash_invested,
            cash_on_cash_return_percent=self._cash_on_cash(ctx.cash_flow.annual_cash_flow, cash_invested),
        )

    def _cash_on_cash(self, annual_cash_flow, cash_invested):
        """Zero cash in reports 0%, not an infinite return."""
        if cash_invested <= 0:
            return ZERO
        return annual_cash_flow * 100 / cash_invested
