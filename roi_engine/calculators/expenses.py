"""
Operating Expense Calculator

Converts annual and percentage-based costs into monthly figures.
"""

from ..models import EvaluationContext, OperatingExpenses


class OperatingExpenseCalculator:
    """Calculates the monthly carrying costs of a deal."""

    def calculate(self, ctx: EvaluationContext) -> OperatingExpenses:
        """
        Monthly expenses. Maintenance & vacancy is reserved against rent,
        so the reserve scales with expected income rather than with costs.

        Total = Mortgage + Taxes + Insurance + HOA + Maintenance/Vacancy + Other
        """
        inputs = ctx.inputs

        monthly_taxes = inputs.annual_taxes / 12
        monthly_insurance = inputs.annual_insurance / 12
        maintenance_vacancy = inputs.monthly_rent * inputs.maintenance_vacancy_percent / 100

        total = (
            ctx.financing.monthly_mortgage_payment
            + monthly_taxes
            + monthly_insurance
            + inputs.monthly_hoa
            + maintenance_vacancy
            + inputs.other_monthly_expenses
        )

        return OperatingExpenses(
            monthly_taxes=monthly_taxes,
            monthly_insurance=monthly_insurance,
            monthly_hoa=inputs.monthly_hoa,
            maintenance_vacancy_amount=maintenance_vacancy,
            other_monthly_expenses=inputs.other_monthly_expenses,
            total_monthly_expenses=total,
        )
