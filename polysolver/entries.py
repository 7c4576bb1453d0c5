"""
PolySolver - Transcript entries.

A transcript holds two kinds of entry, told apart by their ``type`` field:
the echo of a request the user sent and the result that came back.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from polysolver.operations import OperationKind
from polysolver.steps import Step, parse_steps


class RequestEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["request"] = "request"
    operation: OperationKind
    operands: tuple[str, ...]

    @property
    def summary(self) -> str:
        """Echo line as shown in the chat, e.g. ``SUMA: 2x+1, 3x-2``."""
        return f"{self.operation.badge}: {', '.join(self.operands)}"


class ResultEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["result"] = "result"
    operation: OperationKind
    result: str
    explanation: str
    operands: tuple[str, ...]

    @property
    def steps(self) -> list[Step]:
        # Parsed on every read; only the raw explanation is stored.
        return parse_steps(self.explanation)


TranscriptEntry = Annotated[
    Union[RequestEntry, ResultEntry], Field(discriminator="type")
]

transcript_adapter = TypeAdapter(list[TranscriptEntry])
