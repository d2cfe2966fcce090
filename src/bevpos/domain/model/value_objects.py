"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from bevpos.domain.exceptions import ValidationError

CENT = Decimal("0.01")


@dataclass(frozen=True)
class Money:
    """Monetary amount with currency.

    Uses Decimal so order totals are exact sums of their line subtotals.
    Storage converts to integer centavos via ``cents`` / ``from_cents``.
    """

    amount: Decimal
    currency: str = "BRL"

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Money amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if self.amount < Decimal("0"):
            raise ValidationError(
                f"Money amount cannot be negative, got {self.amount}"
            )

    # --- Arithmetic helpers ---------------------------------------------------

    def __add__(self, other: Money) -> Money:
        self._assert_same_currency(other)
        return Money(self.amount + other.amount, self.currency)

    def __mul__(self, factor: int) -> Money:
        if not isinstance(factor, int):
            raise TypeError(f"Can only multiply Money by int, got {type(factor).__name__}")
        return Money(self.amount * factor, self.currency)

    def split(self, parts: int) -> Money:
        """Average over *parts*, rounded half-up to the cent (0 when parts == 0)."""
        if parts <= 0:
            return Money(Decimal("0.00"), self.currency)
        share = (self.amount / parts).quantize(CENT, rounding=ROUND_HALF_UP)
        return Money(share, self.currency)

    @property
    def is_zero(self) -> bool:
        return self.amount == 0

    @property
    def cents(self) -> int:
        return int((self.amount * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))

    # --- Display --------------------------------------------------------------

    def __str__(self) -> str:
        # pt-BR formatting: R$ 1.234,56
        text = f"{self.amount.quantize(CENT, rounding=ROUND_HALF_UP):,.2f}"
        text = text.replace(",", "_").replace(".", ",").replace("_", ".")
        return f"R$ {text}"

    def plain(self) -> str:
        """Machine-readable form, e.g. ``14.70``."""
        return f"{self.amount.quantize(CENT, rounding=ROUND_HALF_UP)}"

    # --- Internal helpers -----------------------------------------------------

    def _assert_same_currency(self, other: Money) -> None:
        if self.currency != other.currency:
            raise ValidationError(
                f"Cannot combine {self.currency} with {other.currency}"
            )

    # --- Factories ------------------------------------------------------------

    @staticmethod
    def of(amount: str | float | int | Decimal) -> Money:
        """Convenient factory that coerces to Decimal safely.

        Amounts are whole centavos, so anything finer than a cent is refused
        rather than rounded away in storage.
        """
        try:
            value = Decimal(str(amount).strip().replace(",", "."))
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid money amount: {amount!r}") from exc
        if not value.is_finite():
            raise ValidationError(f"Invalid money amount: {amount!r}")
        try:
            in_cents = value.quantize(CENT)
        except InvalidOperation as exc:
            raise ValidationError(f"Invalid money amount: {amount!r}") from exc
        if in_cents != value:
            raise ValidationError(f"Money amount cannot have fractions of a cent: {amount!r}")
        return Money(in_cents)

    @staticmethod
    def zero() -> Money:
        return Money(Decimal("0.00"))

    @staticmethod
    def from_cents(cents: int) -> Money:
        return Money((Decimal(cents) / 100).quantize(CENT))


@dataclass(frozen=True)
class Quantity:
    """A positive integer quantity.

    Enforces the invariant that you cannot order zero or negative items.
    """

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValidationError(
                f"Quantity must be an integer, got {type(self.value).__name__}"
            )
        if self.value <= 0:
            raise ValidationError("Quantity must be positive")

    def __str__(self) -> str:
        return str(self.value)
