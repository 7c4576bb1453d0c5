"""
PolySolver - Operation kinds understood by the computation service.
"""

from enum import Enum

from polysolver.errors import UnknownOperation


class OperationKind(str, Enum):
    SUM = "suma"
    DIFFERENCE = "resta"
    PRODUCT = "multiplicacion"
    DIVISION = "division"

    @property
    def label(self) -> str:
        """Button caption, e.g. ``Multiplicacion``."""
        return self.value[:1].upper() + self.value[1:]

    @property
    def badge(self) -> str:
        """Upper-case tag used in request echoes, e.g. ``SUMA``."""
        return self.value.upper()


def coerce_operation(kind) -> OperationKind:
    """Accept an ``OperationKind`` or its wire value (any case)."""
    if isinstance(kind, OperationKind):
        return kind
    try:
        return OperationKind(str(kind).strip().lower())
    except ValueError:
        raise UnknownOperation(str(kind)) from None
