"""
RENTAL ROI ENGINE
Deal evaluation for single rental property purchases
"""

from .evaluator import DealEvaluator
from .models import DealMetrics, FinancialInputs, Verdict, VerdictCategory
from .validators import InsufficientDataError

__all__ = [
    'DealEvaluator',
    'FinancialInputs',
    'DealMetrics',
    'Verdict',
    'VerdictCategory',
    'InsufficientDataError',
]
