"""
Income stream evaluation for household projections.

An income stream pays while its assigned client's simulated age lies within
``[start_age, end_age]``. Indexing compounds from ``start_age``, not from the
first projection year, so a pension starting at 65 pays its base amount at 65
whatever year the projection begins.
"""

from typing import Dict, Iterable, Optional, Tuple

from .household import IncomeStream
from .parsing import compound_factor
from .time_grid import ClientAges


class IncomeStreamEvaluator:
    """Evaluator for one income stream in one projected year."""

    @staticmethod
    def is_active(stream: IncomeStream, age: Optional[float]) -> bool:
        """
        Whether the stream pays at a given age.

        An unknown age or an unset bound means the stream never pays.
        """
        if age is None or stream.start_age is None or stream.end_age is None:
            return False
        return stream.start_age <= age <= stream.end_age

    @staticmethod
    def evaluate(stream: IncomeStream, age: Optional[float]) -> float:
        """
        Income from a stream at a given client age.

        Args:
            stream: Income stream
            age: Simulated age of the stream's assigned client

        Returns:
            annual_amount indexed from start_age, or 0 outside the paying range
        """
        if not IncomeStreamEvaluator.is_active(stream, age):
            return 0.0

        years_into_stream = age - stream.start_age
        indexing_factor = compound_factor(stream.indexing_rate, years_into_stream)
        return stream.annual_amount * indexing_factor

    @staticmethod
    def evaluate_for_year(stream: IncomeStream, ages: ClientAges) -> float:
        """Income from a stream given both clients' ages for the year."""
        return IncomeStreamEvaluator.evaluate(
            stream, ages.age_for(stream.assigned_client_id)
        )

    @staticmethod
    def evaluate_all(
        streams: Iterable[IncomeStream], ages: ClientAges
    ) -> Tuple[Dict[str, float], float]:
        """
        Evaluate every stream for a year.

        Returns:
            Tuple of (income by stream id, total income)
        """
        by_stream: Dict[str, float] = {}
        total = 0.0
        for stream in streams:
            value = IncomeStreamEvaluator.evaluate_for_year(stream, ages)
            by_stream[stream.id] = value
            total += value
        return by_stream, total


def calculate_income_tax(total_income: float, average_tax_rate: float) -> Tuple[float, float]:
    """
    Apply a flat average tax rate to total income.

    Args:
        total_income: Gross income for the year
        average_tax_rate: Rate in percent

    Returns:
        Tuple of (tax estimate, after-tax income)
    """
    tax_estimate = total_income * (average_tax_rate / 100)
    return tax_estimate, total_income - tax_estimate
