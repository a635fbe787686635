"""
Text Report

Plain-text deal summary used for copy-to-clipboard and pre-filled emails.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from urllib.parse import quote

from .evaluator import DealEvaluator
from .models import DealMetrics, FinancialInputs
from .output import round_half_up
from .subscribe import is_valid_email

logger = logging.getLogger(__name__)

REPORT_TITLE = "Rental ROI Report"

STRATEGY_TIPS = (
    "Stress-test the deal by lowering rent or raising expenses slightly.",
    "Compare this property to others using the same assumptions.",
    "Consider your risk tolerance: thin cash flow deals can still work if appreciation or value-add is strong.",
)


class ReportNotReadyError(RuntimeError):
    """Raised when a report is requested before any deal was calculated."""


@dataclass(frozen=True)
class ReportOptions:
    include_verdict_notes: bool = True
    include_breakdown: bool = True
    include_strategy_tips: bool = True

    @classmethod
    def from_dict(cls, data: dict | None) -> "ReportOptions":
        data = data or {}
        return cls(
            include_verdict_notes=bool(data.get("include_verdict_notes", True)),
            include_breakdown=bool(data.get("include_breakdown", True)),
            include_strategy_tips=bool(data.get("include_strategy_tips", True)),
        )


def _money(value: Decimal) -> str:
    """Whole dollars, e.g. $1,234 or -$56."""
    rounded = int(round_half_up(value, Decimal("1")))
    sign = "-" if rounded < 0 else ""
    return f"{sign}${abs(rounded):,}"


def _pct(value: Decimal, places: int = 1) -> str:
    return f"{float(value):.{places}f}%"


def build_report_text(inputs: FinancialInputs, metrics: DealMetrics, options: ReportOptions | None = None) -> str:
    """Build the multi-section report. Same inputs always give the same text."""
    options = options or ReportOptions()
    m = metrics

    lines = [
        REPORT_TITLE,
        "-" * 30,
        f"Property: {inputs.property_label or 'Unnamed property'}",
        "",
        "Purchase & financing",
        f"• Purchase price: {_money(inputs.purchase_price)}",
        f"• Down payment: {_pct(inputs.down_payment_percent)} ({_money(m.down_payment_amount)})",
        f"• Interest rate: {_pct(inputs.interest_rate, 2)} | Term: {inputs.loan_term_years} years",
        "",
        "Income & expenses (monthly)",
        f"• Rent: {_money(inputs.monthly_rent)}",
        f"• Taxes: {_money(m.monthly_taxes)} | Insurance: {_money(m.monthly_insurance)}",
        f"• HOA: {_money(m.monthly_hoa)} | Maintenance & vacancy: "
        f"{_pct(inputs.maintenance_vacancy_percent)} of rent ({_money(m.maintenance_vacancy_amount)})",
        f"• Other expenses: {_money(m.other_monthly_expenses)}",
        f"• Mortgage: {_money(m.monthly_mortgage_payment)}",
        "",
        "Key metrics",
        f"• Monthly cash flow: {_money(m.monthly_cash_flow)}",
        f"• Annual cash flow: {_money(m.annual_cash_flow)}",
        f"• Cash-on-cash return: {_pct(m.cash_on_cash_return_percent)}",
        f"• Cap rate: {_pct(m.cap_rate_percent)}",
        f"• Total cash invested: {_money(m.total_cash_invested)} "
        f"(closing costs {_pct(inputs.closing_costs_percent)} ≈ {_money(m.closing_costs_amount)}, "
        f"upfront repairs {_money(inputs.upfront_repairs)})",
        "",
    ]

    if options.include_verdict_notes:
        lines += [
            f"Deal verdict: {m.verdict.category.value} - {m.verdict.label}",
            m.verdict.explanation,
            "",
        ]

    if options.include_breakdown:
        lines += [
            "Expense breakdown (monthly):",
            f"• Mortgage: {_money(m.monthly_mortgage_payment)}",
            f"• Taxes: {_money(m.monthly_taxes)} | Insurance: {_money(m.monthly_insurance)}",
            f"• HOA: {_money(m.monthly_hoa)} | Maintenance & vacancy: {_money(m.maintenance_vacancy_amount)}",
            f"• Other expenses: {_money(m.other_monthly_expenses)}",
            f"• Total monthly expenses: {_money(m.total_monthly_expenses)}",
            "",
        ]

    if options.include_strategy_tips:
        lines.append("Strategy notes & next steps:")
        lines += [f"• {tip}" for tip in STRATEGY_TIPS]

    return "\n".join(lines)


def build_mailto_url(email: str, inputs: FinancialInputs, metrics: DealMetrics,
                     options: ReportOptions | None = None) -> str:
    """mailto: draft with the report as body. Both subject and body are percent-encoded."""
    subject = f"{REPORT_TITLE} – {inputs.property_label or 'Property'}"
    body = build_report_text(inputs, metrics, options)
    return f"mailto:{quote(email, safe='@')}?subject={quote(subject, safe='')}&body={quote(body, safe='')}"


class ReportSession:
    """
    Keeps the last successfully calculated deal for one user session.

    Copy and email actions work off this deal; nothing is recomputed.
    """

    def __init__(self, evaluator: DealEvaluator | None = None):
        self.evaluator = evaluator or DealEvaluator()
        self.last_inputs: FinancialInputs | None = None
        self.last_metrics: DealMetrics | None = None

    def calculate(self, data: dict) -> DealMetrics:
        """Evaluate and remember. On InsufficientDataError the session is cleared and the error re-raised."""
        inputs = FinancialInputs.from_dict(data)
        try:
            metrics = self.evaluator.evaluate(inputs)
        except ValueError:
            self.reset()
            raise
        self.last_inputs, self.last_metrics = inputs, metrics
        return metrics

    def copy_text(self, options: ReportOptions | None = None) -> str:
        self._require_deal()
        return build_report_text(self.last_inputs, self.last_metrics, options)

    def email_draft(self, email: str, options: ReportOptions | None = None) -> str:
        self._require_deal()
        email = (email or "").strip()
        if not email:
            raise ValueError("Enter an email")
        if not is_valid_email(email):
            raise ValueError(f"Invalid email address: {email}")
        logger.info(f"Email draft prepared for {self.last_inputs.property_label or 'Unnamed property'}")
        return build_mailto_url(email, self.last_inputs, self.last_metrics, options)

    def reset(self) -> None:
        self.last_inputs = None
        self.last_metrics = None

    def _require_deal(self) -> None:
        if self.last_metrics is None:
            raise ReportNotReadyError("Calculate first")
