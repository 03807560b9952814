"""
Liability amortization for household projections.

Liabilities follow an implicit annual schedule rather than a fixed term:
interest accrues on the full opening balance, then twelve monthly payments
are subtracted. A paid-off liability stays at zero.
"""

from typing import List, Optional

from .household import Liability


class LiabilityAmortizationModel:
    """Model advancing a liability balance by one year."""

    @staticmethod
    def calculate_annual_interest(balance: float, interest_rate: float) -> float:
        """
        Interest accrued over a year on the opening balance.

        Args:
            balance: Opening balance
            interest_rate: Annual rate in percent

        Returns:
            Interest amount
        """
        return balance * (interest_rate / 100)

    @staticmethod
    def calculate_annual_payment(monthly_payment: float) -> float:
        """Total of twelve monthly payments."""
        return monthly_payment * 12

    @staticmethod
    def advance(liability: Liability, opening_balance: float) -> float:
        """
        Advance a liability by one year.

        Args:
            liability: Liability definition
            opening_balance: Balance carried from the previous year, or the
                initial balance in year 0

        Returns:
            Closing balance, floored at zero
        """
        if opening_balance <= 0:
            return 0.0

        interest = LiabilityAmortizationModel.calculate_annual_interest(
            opening_balance, liability.interest_rate
        )
        payment = LiabilityAmortizationModel.calculate_annual_payment(liability.payment)
        return max(0.0, opening_balance + interest - payment)

    @staticmethod
    def project_balances(liability: Liability, years: int) -> List[float]:
        """
        Closing balances for ``years`` consecutive projected years.

        Args:
            liability: Liability definition
            years: Number of years to project

        Returns:
            List of closing balances, one per year
        """
        balances = []
        balance = liability.initial_balance
        for _ in range(max(0, years)):
            balance = LiabilityAmortizationModel.advance(liability, balance)
            balances.append(balance)
        return balances

    @staticmethod
    def years_to_payoff(liability: Liability, max_years: int = 100) -> Optional[int]:
        """
        Year offset at which the liability is first fully repaid.

        Args:
            liability: Liability definition
            max_years: Horizon to search

        Returns:
            Zero-based year offset of the first zero closing balance, or None
            if the liability is still outstanding after max_years
        """
        if liability.initial_balance <= 0:
            return 0
        balances = LiabilityAmortizationModel.project_balances(liability, max_years)
        for year_offset, balance in enumerate(balances):
            if balance <= 0:
                return year_offset
        return None
