"""Daily performance classification.

Pure functions only: given the day's revenue and what happened to the
cash register, decide how the day went and what to tell the operator.
"""

from __future__ import annotations

from decimal import Decimal
from enum import Enum

from bevpos.domain.model.value_objects import Money


class DayStatus(Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    WARNING = "warning"
    POOR = "poor"


class RegisterState(Enum):
    NEVER_OPENED = "never_opened"
    OPEN = "open"
    CLOSED = "closed"


EXCELLENT_REVENUE = Decimal("500")
GOOD_REVENUE = Decimal("200")
GOOD_REVENUE_WHILE_OPEN = Decimal("300")


def classify_day(revenue: Money, state: RegisterState, paid_orders: int = 0) -> tuple[DayStatus, str]:
    amount = revenue.amount

    if state is RegisterState.NEVER_OPENED:
        return (
            DayStatus.POOR,
            "Cash register was not opened today. Remember to open it so sales are recorded correctly.",
        )

    if state is RegisterState.OPEN:
        if amount > GOOD_REVENUE_WHILE_OPEN:
            return (
                DayStatus.GOOD,
                f"Good sales so far! {revenue} in sales. Remember to close the register at the end of the day.",
            )
        if amount > 0:
            return (
                DayStatus.WARNING,
                f"{revenue} in sales today. The register is still open - remember to close it at the end of the day.",
            )
        return DayStatus.WARNING, "Register is open but no sales were recorded yet today."

    if amount > EXCELLENT_REVENUE:
        return (
            DayStatus.EXCELLENT,
            f"Excellent day! Register closed with {revenue} in sales and {paid_orders} paid orders.",
        )
    if amount > GOOD_REVENUE:
        return DayStatus.GOOD, f"Good sales day! Register closed with {revenue} in sales."
    if amount > 0:
        return (
            DayStatus.WARNING,
            f"Slow day with {revenue} in sales. Consider ways to increase sales.",
        )
    return DayStatus.POOR, "No sales recorded today. Check that the system is working correctly."
