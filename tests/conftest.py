import sys
from pathlib import Path

# Ensure the project root and backend/ are on sys.path so `polysolver`, `cli`
# and `app` are importable
_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(_ROOT))
sys.path.insert(0, str(_ROOT / "backend"))

import httpx
import pytest

from polysolver import MemorySessionStorage, OperationInvoker, SessionController

API_URL = "http://polinomios.test"


def service_transport(payload=None, status_code: int = 200, calls: list | None = None):
    """Fake computation service answering every POST with *payload*."""

    def handler(request: httpx.Request) -> httpx.Response:
        if calls is not None:
            calls.append(request)
        return httpx.Response(status_code, json=payload)

    return httpx.MockTransport(handler)


@pytest.fixture
def storage() -> MemorySessionStorage:
    return MemorySessionStorage()


@pytest.fixture
def make_controller(storage):
    def _make(payload=None, status_code: int = 200, calls: list | None = None):
        invoker = OperationInvoker(
            API_URL, transport=service_transport(payload, status_code, calls)
        )
        return SessionController(storage=storage, invoker=invoker)

    return _make
