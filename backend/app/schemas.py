from typing import Literal, Optional, Union

from pydantic import BaseModel

from polysolver.entries import RequestEntry, ResultEntry
from polysolver.steps import Step


class OperandRequest(BaseModel):
    operand: str


class RequestInfo(BaseModel):
    type: Literal["request"] = "request"
    operation: str
    operands: list[str]
    summary: str


class ResultInfo(BaseModel):
    type: Literal["result"] = "result"
    operation: str
    operands: list[str]
    result: str
    explanation: str
    steps: list[Step]


class SessionResponse(BaseModel):
    operands: list[str]
    transcript: list[Union[RequestInfo, ResultInfo]]
    busy: bool
    can_run: bool


class OperationResponse(BaseModel):
    request: Optional[RequestInfo] = None
    result: Optional[ResultInfo] = None
    error: Optional[str] = None


def request_info(entry: RequestEntry) -> RequestInfo:
    return RequestInfo(
        operation=entry.operation.value,
        operands=list(entry.operands),
        summary=entry.summary,
    )


def result_info(entry: ResultEntry) -> ResultInfo:
    return ResultInfo(
        operation=entry.operation.value,
        operands=list(entry.operands),
        result=entry.result,
        explanation=entry.explanation,
        steps=entry.steps,
    )


def entry_info(entry) -> Union[RequestInfo, ResultInfo]:
    if isinstance(entry, RequestEntry):
        return request_info(entry)
    return result_info(entry)
