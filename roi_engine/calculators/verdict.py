"""
Verdict Classifier

Ordered rule evaluation over (monthly cash flow, cash-on-cash return).
First matching rule wins.
"""

from ..config import VerdictPolicy
from ..models import EvaluationContext, Verdict, VerdictCategory

STRONG = Verdict(
    category=VerdictCategory.STRONG,
    label="Strong on paper",
    explanation="Solid monthly cash flow with a healthy cash-on-cash return on these assumptions.",
)
DECENT = Verdict(
    category=VerdictCategory.DECENT,
    label="Decent deal",
    explanation=(
        "The deal pays for itself with a reasonable cash-on-cash return. "
        "Verify taxes, insurance and repairs before committing."
    ),
)
NEGATIVE = Verdict(
    category=VerdictCategory.NEGATIVE,
    label="Negative cash flow - be cautious",
    explanation=(
        "This deal loses money each month on these assumptions. It might still work if you "
        "expect strong appreciation, but it deserves a deeper look."
    ),
)
BORDERLINE = Verdict(
    category=VerdictCategory.BORDERLINE,
    label="Tight cash flow - verify numbers",
    explanation=(
        "The deal just clears the expenses. A small change in taxes, insurance, "
        "or repairs could wipe out the profit."
    ),
)


class VerdictClassifier:
    """Classifies a deal into Strong / Decent / Negative / Borderline."""

    def __init__(self, policy: VerdictPolicy | None = None):
        self.policy = policy or VerdictPolicy()

    def classify(self, ctx: EvaluationContext) -> Verdict:
        """
        Rules, in order:
        1. Cash flow > strong minimum AND CoC >= strong minimum -> Strong
        2. Cash flow >= decent minimum AND CoC >= decent minimum -> Decent
        3. Cash flow < 0 -> Negative
        4. Otherwise -> Borderline
        """
        policy = self.policy
        cash_flow = ctx.cash_flow.monthly_cash_flow
        coc = ctx.returns.cash_on_cash_return_percent

        if cash_flow > policy.strong_min_cash_flow and coc >= policy.strong_min_coc:
            return STRONG
        if cash_flow >= policy.decent_min_cash_flow and coc >= policy.decent_min_coc:
            return DECENT
        if cash_flow < 0:
            return NEGATIVE
        return BORDERLINE
