"""
Calculators Package

Provides all calculation components for deal evaluation.
"""

from .cash_flow import CashFlowCalculator
from .expenses import OperatingExpenseCalculator
from .financing import FinancingCalculator, amortized_payment
from .returns import ReturnsCalculator
from .verdict import VerdictClassifier

__all__ = [
    "FinancingCalculator",
    "OperatingExpenseCalculator",
    "CashFlowCalculator",
    "ReturnsCalculator",
    "VerdictClassifier",
    "amortized_payment",
]
