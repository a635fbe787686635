"""
Tests for the plain-text report, mailto drafts and the report session.
"""

from decimal import Decimal

import pytest

from roi_engine import DealEvaluator, FinancialInputs, InsufficientDataError
from roi_engine.report import (
    ReportNotReadyError,
    ReportOptions,
    ReportSession,
    build_mailto_url,
    build_report_text,
)

SAMPLE = {
    "propertyLabel": "123 Elm Street",
    "purchasePrice": 200000,
    "downPaymentPercent": 20,
    "interestRate": 6,
    "loanTermYears": 30,
    "monthlyRent": 1800,
    "annualTaxes": 2400,
    "annualInsurance": 1200,
    "maintenanceVacancyPercent": 10,
    "closingCostsPercent": 3,
    "upfrontRepairs": 5000,
}


@pytest.fixture
def deal():
    inputs = FinancialInputs.from_dict(SAMPLE)
    return inputs, DealEvaluator().evaluate(inputs)


class TestReportText:
    """Test report contents and section toggles."""

    def test_core_sections(self, deal):
        text = build_report_text(*deal)

        assert text.startswith("Rental ROI Report\n")
        assert "Property: 123 Elm Street" in text
        assert "Purchase & financing" in text
        assert "Income & expenses (monthly)" in text
        assert "Key metrics" in text

    def test_key_figures(self, deal):
        text = build_report_text(*deal)

        assert "• Purchase price: $200,000" in text
        assert "• Down payment: 20.0% ($40,000)" in text
        assert "• Interest rate: 6.00% | Term: 30 years" in text
        assert "• Mortgage: $959" in text
        assert "• Monthly cash flow: $361" in text
        assert "• Cap rate: 7.9%" in text
        assert "• Cash-on-cash return: 8.5%" in text
        assert "• Total cash invested: $51,000 (closing costs 3.0% ≈ $6,000, upfront repairs $5,000)" in text

    def test_all_optional_sections_by_default(self, deal):
        text = build_report_text(*deal)

        assert "Deal verdict: Decent" in text
        assert "Expense breakdown (monthly):" in text
        assert "• Total monthly expenses: $1,439" in text
        assert "Strategy notes & next steps:" in text

    def test_optional_sections_can_be_turned_off(self, deal):
        options = ReportOptions(include_verdict_notes=False, include_breakdown=False, include_strategy_tips=False)
        text = build_report_text(*deal, options)

        assert "Deal verdict" not in text
        assert "Expense breakdown" not in text
        assert "Strategy notes" not in text
        assert "Key metrics" in text

    def test_negative_money_format(self):
        inputs = FinancialInputs.from_dict({"purchasePrice": 100000, "monthlyRent": 500, "otherMonthlyExpenses": 756.4})
        text = build_report_text(inputs, DealEvaluator().evaluate(inputs))

        assert "• Monthly cash flow: -$256" in text
        assert "Deal verdict: Negative" in text

    def test_unnamed_property(self):
        inputs = FinancialInputs.from_dict({"purchasePrice": 100000, "monthlyRent": 900})
        text = build_report_text(inputs, DealEvaluator().evaluate(inputs))
        assert "Property: Unnamed property" in text

    def test_deterministic(self, deal):
        assert build_report_text(*deal) == build_report_text(*deal)

    def test_options_from_dict(self):
        options = ReportOptions.from_dict({"include_breakdown": False})

        assert options.include_breakdown is False
        assert options.include_verdict_notes is True
        assert ReportOptions.from_dict(None) == ReportOptions()


class TestMailto:
    """Test the pre-filled email draft."""

    def test_subject_and_body_encoded(self, deal):
        url = build_mailto_url("investor@example.com", *deal)

        assert url.startswith("mailto:investor@example.com?subject=")
        assert "Rental%20ROI%20Report%20%E2%80%93%20123%20Elm%20Street" in url
        assert "&body=Rental%20ROI%20Report%0A" in url
        assert " " not in url

    def test_subject_falls_back_to_property(self):
        inputs = FinancialInputs.from_dict({"purchasePrice": 100000, "monthlyRent": 900})
        url = build_mailto_url("a@b.co", inputs, DealEvaluator().evaluate(inputs))
        assert "subject=Rental%20ROI%20Report%20%E2%80%93%20Property&" in url


class TestReportSession:
    """Test the last-computed-deal holder."""

    @pytest.fixture
    def session(self):
        return ReportSession()

    def test_copy_before_calculate(self, session):
        with pytest.raises(ReportNotReadyError, match="Calculate first"):
            session.copy_text()

    def test_email_before_calculate(self, session):
        with pytest.raises(ReportNotReadyError):
            session.email_draft("investor@example.com")

    def test_calculate_then_copy(self, session):
        metrics = session.calculate(SAMPLE)

        assert metrics.loan_amount == Decimal("160000")
        assert "123 Elm Street" in session.copy_text()

    def test_failed_calculation_clears_previous_deal(self, session):
        session.calculate(SAMPLE)
        with pytest.raises(InsufficientDataError):
            session.calculate({"purchasePrice": 200000})

        assert session.last_metrics is None
        with pytest.raises(ReportNotReadyError):
            session.copy_text()

    def test_email_requires_address(self, session):
        session.calculate(SAMPLE)
        with pytest.raises(ValueError, match="Enter an email"):
            session.email_draft("   ")

    def test_email_rejects_malformed_address(self, session):
        session.calculate(SAMPLE)
        with pytest.raises(ValueError, match="Invalid email"):
            session.email_draft("not-an-email")

    def test_email_draft(self, session):
        session.calculate(SAMPLE)
        url = session.email_draft(" investor@example.com ", ReportOptions(include_strategy_tips=False))

        assert url.startswith("mailto:investor@example.com?")
        assert "Strategy" not in url

    def test_reset(self, session):
        session.calculate(SAMPLE)
        session.reset()
        assert session.last_inputs is None
        assert session.last_metrics is None
