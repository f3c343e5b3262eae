"""
RPC Router - exposes every catalog operation at ``/api/rpc/{name}``.

Queries are called with GET and take their input from ``?input=<json>`` or
from plain query parameters. Mutations are called with POST and take a JSON
object or a multipart form; uploaded files become FileUpload values.
"""

import json
import logging
from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.encoders import jsonable_encoder
from starlette.datastructures import UploadFile

from ...catalog import get_operation
from ...errors import InputValidationError, OperationMethodError
from ...identity import static_token
from ...operations import OperationKind
from ...rpc import GhostwriterRPC
from ...schemas.inputs import FileUpload
from ..dependencies import bearer_token, get_rpc

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/rpc", tags=["rpc"])

FORM_CONTENT_TYPES = ("multipart/form-data", "application/x-www-form-urlencoded")


def _require_kind(name: str, kind: OperationKind) -> None:
    operation = get_operation(name)
    if operation.kind != kind:
        raise OperationMethodError(name, operation.kind.value)


def _query_payload(request: Request) -> dict[str, Any]:
    raw = request.query_params.get("input")
    if raw is None:
        return dict(request.query_params)
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError:
        raise InputValidationError("Query parameter 'input' must be valid JSON") from None
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise InputValidationError("Query parameter 'input' must be a JSON object")
    return payload


async def _body_payload(request: Request) -> dict[str, Any]:
    content_type = request.headers.get("content-type", "")
    if content_type.startswith(FORM_CONTENT_TYPES):
        payload: dict[str, Any] = {}
        form = await request.form()
        for key, value in form.multi_items():
            if isinstance(value, UploadFile):
                payload[key] = FileUpload(
                    filename=value.filename or key,
                    content=await value.read(),
                    content_type=value.content_type or "application/octet-stream",
                )
            else:
                payload[key] = value
        return payload

    body = await request.body()
    if not body.strip():
        return {}
    try:
        payload = json.loads(body)
    except json.JSONDecodeError:
        raise InputValidationError("Request body must be valid JSON") from None
    if not isinstance(payload, dict):
        raise InputValidationError("Request body must be a JSON object")
    return payload


def _forwarded(token: str | None):
    """Forward the inbound bearer token; without one the app-level provider applies."""
    return static_token(token) if token else None


def _result(value: Any) -> dict[str, Any]:
    return {"result": jsonable_encoder(value, by_alias=True, exclude_unset=True)}


@router.get("/{name}")
async def rpc_query(
    name: str,
    request: Request,
    rpc: GhostwriterRPC = Depends(get_rpc),
    token: str | None = Depends(bearer_token),
):
    """Invoke a query operation."""
    _require_kind(name, OperationKind.QUERY)
    payload = _query_payload(request)
    result = await rpc.call(name, payload, token_provider=_forwarded(token))
    return _result(result)


@router.post("/{name}")
async def rpc_mutation(
    name: str,
    request: Request,
    rpc: GhostwriterRPC = Depends(get_rpc),
    token: str | None = Depends(bearer_token),
):
    """Invoke a mutation operation."""
    _require_kind(name, OperationKind.MUTATION)
    payload = await _body_payload(request)
    result = await rpc.call(name, payload, token_provider=_forwarded(token))
    return _result(result)
