"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as scheduling an entry twice."""


class StoreReadError(DomainError):
    """A store query failed; the whole computation is aborted."""


def client_not_found(client_id: int) -> str:
    """Return message for missing client."""
    return f"Client {client_id} not found"


def item_not_found(item_id: int) -> str:
    """Return message for missing catalog item."""
    return f"Catalog item {item_id} not found"


def entry_not_found(entry_id: int) -> str:
    """Return message for missing ledger entry."""
    return f"Entry {entry_id} not found"


def schedule_not_found(schedule_id: int) -> str:
    """Return message for missing schedule row."""
    return f"Schedule {schedule_id} not found"


def entry_already_scheduled(entry_id: int, count: int) -> str:
    """Return message when an entry already owns schedule rows."""
    return (
        f"Entry {entry_id} already has {count} "
        f"installment{'s' if count != 1 else ''}"
    )


def entry_settled_by_schedule(entry_id: int) -> str:
    """Return message when an entry's payment is driven by its installments."""
    return f"Entry {entry_id} is paid through its installments; use the schedule commands"
