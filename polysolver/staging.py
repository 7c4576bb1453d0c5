"""
PolySolver - Operands entered by the user but not yet submitted.
"""

from polysolver.errors import OperandIndexError


class OperandStagingList:
    """Ordered operands; position ``i`` is shown to the user as ``P{i+1}``."""

    def __init__(self) -> None:
        self._operands: list[str] = []

    def __len__(self) -> int:
        return len(self._operands)

    def __iter__(self):
        return iter(self._operands)

    @property
    def operands(self) -> tuple[str, ...]:
        return tuple(self._operands)

    def add(self, text: str) -> bool:
        """Stage *text* trimmed. Blank input is ignored; returns whether it was added."""
        text = text.strip()
        if not text:
            return False
        self._operands.append(text)
        return True

    def remove_at(self, index: int) -> str:
        """Remove and return the operand at *index*.

        Negative indices are rejected rather than counted from the end.
        """
        if not 0 <= index < len(self._operands):
            raise OperandIndexError(index, len(self._operands))
        return self._operands.pop(index)

    def clear(self) -> None:
        self._operands.clear()
