"""
PolySolver - Session model for the polynomial calculator client.
"""

from polysolver.controller import OperationOutcome, SessionController
from polysolver.entries import RequestEntry, ResultEntry, TranscriptEntry
from polysolver.errors import (
    CorruptPersistedRecord,
    InsufficientOperands,
    OperandIndexError,
    OperationInProgress,
    PolySolverError,
    RemoteComputationFailed,
    UnknownOperation,
)
from polysolver.invoker import OperationInvoker
from polysolver.operations import OperationKind
from polysolver.staging import OperandStagingList
from polysolver.steps import Step, StepKind, parse_steps
from polysolver.storage import JsonFileSessionStorage, MemorySessionStorage
from polysolver.transcript import TranscriptStore

__all__ = [
    "CorruptPersistedRecord",
    "InsufficientOperands",
    "JsonFileSessionStorage",
    "MemorySessionStorage",
    "OperandIndexError",
    "OperandStagingList",
    "OperationInProgress",
    "OperationInvoker",
    "OperationKind",
    "OperationOutcome",
    "PolySolverError",
    "RemoteComputationFailed",
    "RequestEntry",
    "ResultEntry",
    "SessionController",
    "Step",
    "StepKind",
    "TranscriptEntry",
    "TranscriptStore",
    "UnknownOperation",
    "parse_steps",
]
