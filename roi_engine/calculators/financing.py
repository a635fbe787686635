"""
Financing Calculator

Derives the down payment, loan amount and the level monthly payment of a
fully amortizing loan.
"""

from decimal import Decimal, Overflow

from ..models import ZERO, Financing, EvaluationContext


def amortized_payment(principal: Decimal, monthly_rate: Decimal, n_payments: int) -> Decimal:
    """
    Level payment that retires `principal` over `n_payments` months.

    A 0% rate amortizes straight-line (principal / n). No loan or no term
    means no payment. When the growth factor leaves the decimal range the
    payment is the interest-only limit, principal x rate.
    """
    if principal <= 0 or n_payments <= 0:
        return ZERO
    if monthly_rate == 0:
        return principal / n_payments
    try:
        factor = (1 + monthly_rate) ** n_payments
    except Overflow:
        return principal * monthly_rate
    return principal * monthly_rate / (1 - 1 / factor)


class FinancingCalculator:
    """Calculates the purchase financing for a deal."""

    MONTHS_PER_YEAR = 12

    def calculate(self, ctx: EvaluationContext) -> Financing:
        inputs = ctx.inputs

        down_payment = inputs.purchase_price * inputs.down_payment_percent / 100
        # Down payments above 100% do not produce a negative loan
        loan_amount = max(inputs.purchase_price - down_payment, ZERO)

        monthly_rate = inputs.interest_rate / 100 / self.MONTHS_PER_YEAR
        n_payments = inputs.loan_term_years * self.MONTHS_PER_YEAR

        return Financing(
            down_payment_amount=down_payment,
            loan_amount=loan_amount,
            monthly_rate=monthly_rate,
            number_of_payments=n_payments,
            monthly_mortgage_payment=amortized_payment(loan_amount, monthly_rate, n_payments),
        )
