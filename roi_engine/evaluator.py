"""
Deal Evaluator - Main Orchestrator

Coordinates the deal evaluation pipeline through discrete, testable steps.
Pure and synchronous: no I/O and no state kept between calls.
"""

import json
import logging
from typing import Any, Dict

from .calculators import (
    CashFlowCalculator,
    FinancingCalculator,
    OperatingExpenseCalculator,
    ReturnsCalculator,
    VerdictClassifier,
)
from .config import VerdictPolicy
from .models import DealMetrics, EvaluationContext, FinancialInputs
from .output import OutputBuilder
from .validators import InputValidator

logger = logging.getLogger(__name__)


class DealEvaluator:
    """
    Main orchestrator for deal evaluation.

    Implements a clear pipeline pattern:
    1. Validate Input
    2. Build Context
    3. Calculate Financing
    4. Calculate Monthly Expenses
    5. Calculate Cash Flow
    6. Calculate NOI, Cap Rate and Cash-on-Cash
    7. Classify Verdict
    8. Build Metrics
    """

    def __init__(self, policy: VerdictPolicy | None = None):
        self.validator = InputValidator()
        self.financing_calculator = FinancingCalculator()
        self.expense_calculator = OperatingExpenseCalculator()
        self.cash_flow_calculator = CashFlowCalculator()
        self.returns_calculator = ReturnsCalculator()
        self.verdict_classifier = VerdictClassifier(policy)
        self.output_builder = OutputBuilder()

    def evaluate(self, inputs: FinancialInputs) -> DealMetrics:
        """
        Evaluate a deal through the complete pipeline.

        Args:
            inputs: Sanitized FinancialInputs

        Returns:
            DealMetrics with every derived figure and the verdict

        Raises:
            InsufficientDataError: purchase price or monthly rent is not positive
        """
        # Step 1: Validate
        self.validator.validate(inputs)

        # Step 2: Build initial context
        ctx = EvaluationContext(inputs=inputs)

        # Step 3: Down payment, loan, mortgage payment
        ctx.financing = self.financing_calculator.calculate(ctx)

        # Step 4: Monthly expenses (mortgage included)
        ctx.expenses = self.expense_calculator.calculate(ctx)

        # Step 5: Cash flow
        ctx.cash_flow = self.cash_flow_calculator.calculate(ctx)

        # Step 6: NOI, cap rate, cash invested, cash-on-cash
        ctx.returns = self.returns_calculator.calculate(ctx)

        # Step 7: Verdict
        ctx.verdict = self.verdict_classifier.classify(ctx)

        # Step 8: Freeze into metrics
        return DealMetrics.from_context(ctx)

    def evaluate_from_dict(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Evaluate a deal from raw dictionary input.

        Convenience method for API usage.
        """
        inputs = FinancialInputs.from_dict(data)
        label = inputs.property_label or "Unnamed property"
        logger.info(f"Evaluating deal: {label}")

        metrics = self.evaluate(inputs)

        logger.info(f"Deal evaluated: {label} -> {metrics.verdict.category.value}")
        return self.output_builder.build(inputs, metrics)


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

def evaluate_deal_from_dict(input_data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Evaluate a deal from Python dict and return Python dict.
    Uses the verdict thresholds configured in the environment.
    """
    evaluator = DealEvaluator(VerdictPolicy.from_env())
    return evaluator.evaluate_from_dict(input_data)


def evaluate_deal_from_json(json_input: str) -> str:
    """
    Evaluate a deal from JSON string input and return JSON string output.
    """
    try:
        input_data = json.loads(json_input)
        result = evaluate_deal_from_dict(input_data)
        return json.dumps(result, indent=2)

    except ValueError as e:
        # Includes InsufficientDataError and json.JSONDecodeError
        error_response = {"error": str(e), "status": "validation_failed"}
        return json.dumps(error_response, indent=2)

    except Exception as e:
        logger.error(f"Evaluation error: {str(e)}", exc_info=True)
        error_response = {"error": str(e), "status": "failed"}
        return json.dumps(error_response, indent=2)
