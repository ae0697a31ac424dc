"""Domain errors that Protean does not ship.

Missing records raise Protean's ``ObjectNotFoundError`` and bad input raises
its ``ValidationError``; the classes here cover ownership and state-machine
violations.
"""

from protean.exceptions import InvalidOperationError


class ForbiddenError(Exception):
    """The caller does not own the cart or order being mutated."""


class InvalidTransitionError(InvalidOperationError):
    """The requested order status is not reachable from the current one."""


class CartConflictError(InvalidOperationError):
    """The cart already holds items from a different restaurant."""
