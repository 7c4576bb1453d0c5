import asyncio
import json

import httpx
import pytest

from conftest import API_URL
from polysolver.controller import SessionController
from polysolver.entries import RequestEntry, ResultEntry
from polysolver.errors import (
    InsufficientOperands,
    OperationInProgress,
    UnknownOperation,
)
from polysolver.invoker import OperationInvoker
from polysolver.operations import OperationKind
from polysolver.transcript import TRANSCRIPT_KEY

GOOD_PAYLOAD = {"resultado": "5x - 1", "explicacion": "◆ Agrupar ➡ ▶ 2x + 3x ➡ listo"}


def _stage(controller: SessionController, *operands: str) -> None:
    for op in operands:
        controller.stage_operand(op)


def test_stage_and_unstage_operands(make_controller) -> None:
    controller = make_controller(GOOD_PAYLOAD)
    _stage(controller, " 2x+1 ", "", "3x-2", "x")
    assert controller.staged == ("2x+1", "3x-2", "x")

    assert controller.unstage_operand(1) is True
    assert controller.staged == ("2x+1", "x")
    assert controller.unstage_operand(5) is False
    assert controller.staged == ("2x+1", "x")


def test_run_operation_appends_request_then_result(make_controller, storage) -> None:
    calls: list = []
    controller = make_controller(GOOD_PAYLOAD, calls=calls)
    _stage(controller, "2x+1", "3x-2")

    outcome = asyncio.run(controller.run_operation("suma"))

    assert outcome.ok
    request, result = controller.entries
    assert request == RequestEntry(operation=OperationKind.SUM, operands=("2x+1", "3x-2"))
    assert isinstance(result, ResultEntry)
    assert result.operands == ("2x+1", "3x-2")
    assert outcome.request == request and outcome.result == result
    assert controller.staged == ()
    assert controller.busy is False
    assert len(calls) == 1
    assert len(json.loads(storage.get_item(TRANSCRIPT_KEY))) == 2


def test_request_is_visible_while_call_is_pending(storage) -> None:
    seen_during_call: list = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen_during_call.append((controller.busy, controller.entries))
        seen_during_call.append(json.loads(storage.get_item(TRANSCRIPT_KEY)))
        return httpx.Response(200, json=GOOD_PAYLOAD)

    controller = SessionController(
        storage=storage,
        invoker=OperationInvoker(API_URL, transport=httpx.MockTransport(handler)),
    )
    _stage(controller, "a", "b")
    asyncio.run(controller.run_operation(OperationKind.PRODUCT))

    (busy, entries), persisted = seen_during_call
    assert busy is True
    assert [type(e) for e in entries] == [RequestEntry]
    assert persisted[0]["type"] == "request"


@pytest.mark.parametrize("operands", [(), ("only one",)])
def test_insufficient_operands_has_no_side_effects(make_controller, storage, operands) -> None:
    calls: list = []
    controller = make_controller(GOOD_PAYLOAD, calls=calls)
    _stage(controller, *operands)

    with pytest.raises(InsufficientOperands):
        asyncio.run(controller.run_operation("suma"))

    assert calls == []
    assert controller.entries == ()
    assert controller.staged == operands
    assert storage.get_item(TRANSCRIPT_KEY) is None


def test_unknown_operation_has_no_side_effects(make_controller) -> None:
    controller = make_controller(GOOD_PAYLOAD)
    _stage(controller, "a", "b")
    with pytest.raises(UnknownOperation):
        asyncio.run(controller.run_operation("raiz"))
    assert controller.staged == ("a", "b")


def test_malformed_response_leaves_orphan_request(make_controller, storage) -> None:
    controller = make_controller({"resultado": "x"})
    _stage(controller, "2x+1", "3x-2")

    outcome = asyncio.run(controller.run_operation("suma"))

    assert not outcome.ok
    assert "explicacion" in outcome.error
    assert controller.entries == (outcome.request,)
    assert controller.staged == ()
    assert controller.busy is False

    fresh = SessionController(storage=storage)
    assert fresh.restore() == 1


def test_failure_is_logged(make_controller, caplog) -> None:
    controller = make_controller(GOOD_PAYLOAD, status_code=503)
    _stage(controller, "a", "b")
    with caplog.at_level("WARNING", logger="polysolver.controller"):
        asyncio.run(controller.run_operation("resta"))
    assert "Resta failed" in caplog.text


def test_user_can_run_again_after_failure(storage) -> None:
    responses = iter([httpx.Response(500), httpx.Response(200, json=GOOD_PAYLOAD)])
    controller = SessionController(
        storage=storage,
        invoker=OperationInvoker(API_URL, transport=httpx.MockTransport(lambda r: next(responses))),
    )
    _stage(controller, "a", "b")
    assert not asyncio.run(controller.run_operation("suma")).ok

    _stage(controller, "a", "b")
    assert asyncio.run(controller.run_operation("suma")).ok
    assert [e.type for e in controller.entries] == ["request", "request", "result"]


def test_second_operation_is_refused_while_busy(storage) -> None:
    async def _scenario():
        release = asyncio.Event()
        entered = asyncio.Event()

        class _SlowInvoker(OperationInvoker):
            async def _post(self, url, payload):
                entered.set()
                await release.wait()
                return httpx.Response(
                    200, json=GOOD_PAYLOAD, request=httpx.Request("POST", url)
                )

        controller = SessionController(storage=storage, invoker=_SlowInvoker(API_URL))
        _stage(controller, "a", "b")
        first = asyncio.create_task(controller.run_operation("suma"))
        await entered.wait()

        assert controller.busy is True
        assert controller.can_run is False
        _stage(controller, "c", "d")
        with pytest.raises(OperationInProgress):
            await controller.run_operation("resta")

        release.set()
        return controller, await first

    controller, outcome = asyncio.run(_scenario())
    assert outcome.ok
    assert [e.type for e in controller.entries] == ["request", "result"]
    assert controller.staged == ()


def test_clear_transcript_then_restore_is_empty(make_controller, storage) -> None:
    controller = make_controller(GOOD_PAYLOAD)
    _stage(controller, "a", "b")
    asyncio.run(controller.run_operation("suma"))

    controller.clear_transcript()

    assert controller.entries == ()
    fresh = SessionController(storage=storage)
    assert fresh.restore() == 0
    assert fresh.entries == ()


def test_restore_rebuilds_previous_session(make_controller, storage) -> None:
    controller = make_controller(GOOD_PAYLOAD)
    for kind in ("suma", "division"):
        _stage(controller, "x+1", "x-1")
        asyncio.run(controller.run_operation(kind))

    fresh = SessionController(storage=storage)
    assert fresh.restore() == 4
    assert fresh.entries == controller.entries


def test_run_operation_reports_request_to_caller_first(make_controller) -> None:
    controller = make_controller(GOOD_PAYLOAD)
    _stage(controller, "a", "b")
    seen: list = []

    outcome = asyncio.run(
        controller.run_operation("suma", on_request=lambda e: seen.append(controller.entries))
    )

    assert seen == [(outcome.request,)]
