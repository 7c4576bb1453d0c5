"""
PolySolver - Client for the remote polynomial computation service.

One POST per invocation to ``{base_url}/api/polinomios/{kind}`` with body
``{"polinomios": [...]}``. The service answers with ``resultado`` and
``explicacion``; anything else is a failure. No retries, no timeout.
"""

import logging
from typing import Callable, Optional, Sequence

import httpx

from polysolver.config import DEFAULT_API_URL
from polysolver.entries import RequestEntry, ResultEntry
from polysolver.errors import InsufficientOperands, RemoteComputationFailed
from polysolver.operations import coerce_operation

logger = logging.getLogger(__name__)

MIN_OPERANDS = 2


def _required_text(data: dict, field: str) -> str:
    value = data.get(field)
    if not isinstance(value, str) or not value.strip():
        raise RemoteComputationFailed(f"Response is missing '{field}'.")
    return value


class OperationInvoker:
    """Sends staged operands to the computation service.

    Pass ``client`` to reuse an existing ``httpx.AsyncClient``, or
    ``transport`` to build a fresh client per call on top of it.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_API_URL,
        client: Optional[httpx.AsyncClient] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._client = client
        self._transport = transport

    def endpoint(self, kind) -> str:
        return f"{self.base_url}/api/polinomios/{coerce_operation(kind).value}"

    async def _post(self, url: str, payload: dict) -> httpx.Response:
        if self._client is not None:
            return await self._client.post(url, json=payload)
        async with httpx.AsyncClient(transport=self._transport, timeout=None) as client:
            return await client.post(url, json=payload)

    async def invoke(
        self,
        kind,
        operands: Sequence[str],
        on_request: Optional[Callable[[RequestEntry], None]] = None,
    ) -> ResultEntry:
        """Run *kind* over *operands* and return the result entry.

        ``on_request`` receives the request entry before the call is sent,
        so it can be shown while the answer is pending.
        """
        operation = coerce_operation(kind)
        operands = tuple(operands)
        if len(operands) < MIN_OPERANDS:
            raise InsufficientOperands(len(operands))

        request = RequestEntry(operation=operation, operands=operands)
        if on_request is not None:
            on_request(request)

        url = self.endpoint(operation)
        logger.debug("POST %s with %d operands", url, len(operands))
        try:
            response = await self._post(url, {"polinomios": list(operands)})
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as exc:
            raise RemoteComputationFailed(f"Request to {url} failed: {exc}") from exc
        except ValueError as exc:
            raise RemoteComputationFailed(f"Response from {url} is not JSON.") from exc

        if not isinstance(data, dict):
            raise RemoteComputationFailed("Response is not a JSON object.")
        return ResultEntry(
            operation=operation,
            result=_required_text(data, "resultado"),
            explanation=_required_text(data, "explicacion"),
            operands=operands,
        )
