"""
PolySolver - Session controller.

Owns the staged operands and the transcript, and runs one operation at a
time against the computation service. This is the surface front ends use.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from polysolver.entries import RequestEntry, ResultEntry
from polysolver.errors import (
    InsufficientOperands,
    OperandIndexError,
    OperationInProgress,
    RemoteComputationFailed,
)
from polysolver.invoker import MIN_OPERANDS, OperationInvoker
from polysolver.operations import coerce_operation
from polysolver.staging import OperandStagingList
from polysolver.storage import MemorySessionStorage, SessionStorage
from polysolver.transcript import TranscriptStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OperationOutcome:
    """What one ``run_operation`` call produced.

    ``result`` is ``None`` when the service failed; ``error`` then holds
    the reason and ``request`` stays in the transcript on its own.
    """

    request: Optional[RequestEntry]
    result: Optional[ResultEntry] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.result is not None


class SessionController:
    def __init__(
        self,
        storage: Optional[SessionStorage] = None,
        invoker: Optional[OperationInvoker] = None,
    ) -> None:
        self._staging = OperandStagingList()
        self._transcript = TranscriptStore(storage if storage is not None else MemorySessionStorage())
        self._invoker = invoker if invoker is not None else OperationInvoker()
        self._busy = False

    # ── Read surface ────────────────────────────────────────────────────

    @property
    def staged(self) -> tuple[str, ...]:
        return self._staging.operands

    @property
    def entries(self) -> tuple:
        return self._transcript.entries

    @property
    def busy(self) -> bool:
        return self._busy

    @property
    def can_run(self) -> bool:
        return not self._busy and len(self._staging) >= MIN_OPERANDS

    # ── Session lifecycle ───────────────────────────────────────────────

    def restore(self) -> int:
        """Load the persisted transcript; call once when the session starts."""
        return self._transcript.restore()

    def clear_transcript(self) -> None:
        self._transcript.clear()

    # ── Operands ────────────────────────────────────────────────────────

    def stage_operand(self, text: str) -> bool:
        return self._staging.add(text)

    def unstage_operand(self, index: int) -> bool:
        try:
            self._staging.remove_at(index)
        except OperandIndexError:
            return False
        return True

    # ── Operations ──────────────────────────────────────────────────────

    async def run_operation(
        self,
        kind,
        on_request: Optional[Callable[[RequestEntry], None]] = None,
    ) -> OperationOutcome:
        """Send the staged operands for *kind* and record the exchange.

        Raises ``UnknownOperation``, ``OperationInProgress`` or
        ``InsufficientOperands`` before touching any state. Once the call is
        made the staged operands are cleared whatever the outcome.
        ``on_request`` sees the request entry as soon as it is recorded, while
        the call is still pending.
        """
        operation = coerce_operation(kind)
        if self._busy:
            raise OperationInProgress()
        operands = self._staging.operands
        if len(operands) < MIN_OPERANDS:
            raise InsufficientOperands(len(operands))

        sent: list[RequestEntry] = []

        def _record_request(entry: RequestEntry) -> None:
            sent.append(entry)
            self._transcript.append(entry)
            if on_request is not None:
                on_request(entry)

        self._busy = True
        try:
            result = await self._invoker.invoke(operation, operands, on_request=_record_request)
            self._transcript.append(result)
        except RemoteComputationFailed as exc:
            logger.warning("%s failed: %s", operation.label, exc)
            return OperationOutcome(request=sent[0] if sent else None, error=str(exc))
        finally:
            self._busy = False
            self._staging.clear()

        return OperationOutcome(request=sent[0] if sent else None, result=result)
