"""
Response Normalizer - validates and unwraps the API envelope, classifies failures.

Pure function of (response, operation): no side effects, safe to re-run on
the same response object. Raw parse exceptions never reach the caller.
"""

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from ..errors import ApplicationError, SchemaError, TransportError
from ..operations import Operation
from ..schemas.envelope import ENVELOPE_ADAPTER, ErrorOnlyBody, FailureEnvelope, Page

logger = logging.getLogger(__name__)

EXPECTED_STATUS = 200

_NO_BODY = object()


def _read_json(response: httpx.Response) -> Any:
    """Parsed JSON body, or the _NO_BODY sentinel when the body is not JSON."""
    try:
        return response.json()
    except ValueError:
        return _NO_BODY


def _failure_from_body(body: Any, status_code: int) -> ApplicationError | None:
    """Application error carried by a failure envelope or a bare ``{"error": {...}}`` body."""
    if not isinstance(body, dict):
        return None
    for model in (FailureEnvelope, ErrorOnlyBody):
        try:
            error = model.model_validate(body).error
        except ValidationError:
            continue
        return ApplicationError(error.code, error.message, error.details, status_code=status_code)
    return None


def normalize_response(response: httpx.Response, operation: Operation) -> Any:
    """
    Convert a raw response into the operation's typed value or a classified failure.

    Args:
        response: Final HTTP response from the transport.
        operation: Catalog entry that produced the request.

    Returns:
        The validated ``data`` value, or a Page for paginated operations.

    Raises:
        ApplicationError: The API reported {success: false, error: {...}} (any status).
        TransportError: Non-200 status with a body that is no recognized error shape.
        SchemaError: 200 status with a body that is not JSON, not an envelope,
            or whose data does not match the declared output.
    """
    status = response.status_code
    body = _read_json(response)

    if status != EXPECTED_STATUS:
        failure = _failure_from_body(body, status)
        if failure is not None:
            raise failure
        raise TransportError("Request failed", status_code=status)

    if body is _NO_BODY:
        raise SchemaError(f"{operation.name}: response body is not valid JSON")

    try:
        envelope = ENVELOPE_ADAPTER.validate_python(body)
    except ValidationError as e:
        raise SchemaError(
            f"{operation.name}: response does not match the envelope shape",
            {"errors": e.error_count()},
        ) from e

    if isinstance(envelope, FailureEnvelope):
        error = envelope.error
        raise ApplicationError(error.code, error.message, error.details, status_code=status)

    try:
        data = operation.output_adapter.validate_python(envelope.data)
    except ValidationError as e:
        raise SchemaError(
            f"{operation.name}: response data does not match the declared output",
            {"errors": e.error_count()},
        ) from e

    if operation.paginated:
        return Page(data=data, meta=envelope.meta)
    return data
