from typing import Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from app.schemas import (
    OperandRequest,
    OperationResponse,
    SessionResponse,
    entry_info,
    request_info,
    result_info,
)
from polysolver import (
    InsufficientOperands,
    MemorySessionStorage,
    OperationInProgress,
    OperationInvoker,
    SessionController,
    UnknownOperation,
)
from polysolver.config import load_settings


def _session_state(controller: SessionController) -> SessionResponse:
    return SessionResponse(
        operands=list(controller.staged),
        transcript=[entry_info(e) for e in controller.entries],
        busy=controller.busy,
        can_run=controller.can_run,
    )


def create_app(controller: Optional[SessionController] = None) -> FastAPI:
    if controller is None:
        settings = load_settings()
        controller = SessionController(
            storage=MemorySessionStorage(),
            invoker=OperationInvoker(settings.api_url),
        )
    controller.restore()

    app = FastAPI(title="PolySolver Session API")
    app.state.controller = controller

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/api/session", response_model=SessionResponse)
    def get_session():
        return _session_state(controller)

    @app.post("/api/session/operands", response_model=SessionResponse)
    def stage_operand(req: OperandRequest):
        controller.stage_operand(req.operand)
        return _session_state(controller)

    @app.delete("/api/session/operands/{index}", response_model=SessionResponse)
    def unstage_operand(index: int):
        if not controller.unstage_operand(index):
            raise HTTPException(status_code=404, detail=f"No operand at position {index}.")
        return _session_state(controller)

    @app.post("/api/session/operations/{kind}", response_model=OperationResponse)
    async def run_operation(kind: str):
        try:
            outcome = await controller.run_operation(kind)
        except UnknownOperation as e:
            raise HTTPException(status_code=404, detail=str(e))
        except InsufficientOperands as e:
            raise HTTPException(status_code=400, detail=str(e))
        except OperationInProgress as e:
            raise HTTPException(status_code=409, detail=str(e))

        return OperationResponse(
            request=request_info(outcome.request) if outcome.request else None,
            result=result_info(outcome.result) if outcome.result else None,
            error=outcome.error,
        )

    @app.delete("/api/session/transcript", response_model=SessionResponse)
    def clear_transcript():
        controller.clear_transcript()
        return _session_state(controller)

    return app


app = create_app()
