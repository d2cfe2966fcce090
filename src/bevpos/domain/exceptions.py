"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A request field or business invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class InsufficientStockError(DomainException):
    """The requested quantity exceeds the stock currently available."""

    def __init__(
        self,
        product_id: str,
        product_name: str,
        available: int,
        requested: int,
    ) -> None:
        self.product_id = product_id
        self.product_name = product_name
        self.available = available
        self.requested = requested
        super().__init__(
            f"Insufficient stock for {product_name} "
            f"(need {requested}, have {available} available)"
        )


class ConflictError(DomainException):
    """A concurrent writer got there first (duplicate number, open session)."""


class PersistenceUnavailableError(DomainException):
    """The storage backend is unreachable or not configured."""

    def __init__(self, message: str, hint: str | None = None) -> None:
        self.hint = hint
        super().__init__(f"{message} ({hint})" if hint else message)


class SchemaMissingError(DomainException):
    """An expected table does not exist yet (fresh install)."""

    def __init__(self, table: str | None = None) -> None:
        self.table = table
        what = f"Table '{table}'" if table else "A required table"
        super().__init__(
            f"{what} does not exist; run 'bevpos db init' to install the schema"
        )
