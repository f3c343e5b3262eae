"""
Request Encoder - turns an operation and a validated Input Value into an outbound request.

Rules applied uniformly for every operation:
- path placeholders are filled from the input and removed from the body/query
- GET/DELETE send the remaining fields as query parameters, with no body
- JSON operations send the remaining fields as a JSON object
- MULTIPART operations send scalars as form fields and files as binary parts
- AUTO operations pick multipart only when the actual input carries a file
- None values are omitted everywhere
"""

import json
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import quote

from pydantic import BaseModel

from ..identity import IdentityContext
from ..operations import Encoding, Operation
from ..schemas.inputs import FileUpload

QUERY_METHODS = frozenset({"GET", "DELETE"})

FilePart = tuple[str, tuple[str, bytes, str]]


@dataclass(frozen=True)
class EncodedRequest:
    """A complete outbound request, ready for the transport."""

    method: str
    path: str
    encoding: Encoding
    headers: dict[str, str] = field(default_factory=dict)
    params: dict[str, str] | None = None
    json: dict[str, Any] | None = None
    data: dict[str, str] | None = None
    files: list[FilePart] | None = None

    def httpx_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for ``httpx.AsyncClient.request``."""
        kwargs: dict[str, Any] = {"headers": dict(self.headers)}
        if self.params:
            kwargs["params"] = self.params
        if self.json is not None:
            kwargs["json"] = self.json
        if self.data:
            kwargs["data"] = self.data
        if self.files:
            kwargs["files"] = self.files
        return kwargs


def form_value(value: Any) -> str:
    """Serialize a scalar for a query string or multipart field."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float, str)):
        return str(value)
    if isinstance(value, BaseModel):
        return value.model_dump_json(by_alias=True, exclude_none=True)
    return json.dumps(value)


def has_file(input_value: BaseModel | None) -> bool:
    """Whether any field of the Input Value is file-like."""
    if input_value is None:
        return False
    return any(isinstance(getattr(input_value, name), FileUpload) for name in type(input_value).model_fields)


def _wire_fields(input_value: BaseModel | None, skip: tuple[str, ...]) -> dict[str, Any]:
    """Python values keyed by wire name, with path params and None values dropped."""
    if input_value is None:
        return {}
    fields: dict[str, Any] = {}
    for name, info in type(input_value).model_fields.items():
        if name in skip:
            continue
        value = getattr(input_value, name)
        if value is None:
            continue
        fields[info.alias or name] = value
    return fields


def _fill_path(operation: Operation, input_value: BaseModel | None) -> str:
    if not operation.path_params:
        return operation.path
    values = {name: quote(form_value(getattr(input_value, name)), safe="") for name in operation.path_params}
    return operation.path.format(**values)


def select_encoding(operation: Operation, input_value: BaseModel | None) -> Encoding:
    """Resolve the body encoding for this call (AUTO becomes JSON or MULTIPART)."""
    if operation.encoding == Encoding.AUTO:
        return Encoding.MULTIPART if has_file(input_value) else Encoding.JSON
    return operation.encoding


def encode_request(operation: Operation, input_value: BaseModel | None, identity: IdentityContext) -> EncodedRequest:
    """Build the outbound request for one call.

    Args:
        operation: Catalog entry being invoked.
        input_value: Validated Input Value (None for input-less operations).
        identity: Per-call identity context.

    Returns:
        EncodedRequest: method, filled path, headers and body/query.
    """
    path = _fill_path(operation, input_value)
    fields = _wire_fields(input_value, skip=operation.path_params)
    headers = {"Accept": "application/json", **identity.headers()}
    encoding = select_encoding(operation, input_value)

    if operation.method in QUERY_METHODS:
        params = {key: form_value(value) for key, value in fields.items()}
        return EncodedRequest(
            method=operation.method,
            path=path,
            encoding=encoding,
            headers=headers,
            params=params or None,
        )

    if encoding == Encoding.MULTIPART:
        data: dict[str, str] = {}
        files: list[FilePart] = []
        for key, value in fields.items():
            if isinstance(value, FileUpload):
                files.append((key, (value.filename, value.content, value.content_type)))
            else:
                data[key] = form_value(value)
        return EncodedRequest(
            method=operation.method,
            path=path,
            encoding=encoding,
            headers=headers,
            data=data or None,
            files=files or None,
        )

    body = input_value.model_dump(mode="json", by_alias=True, exclude_none=True) if input_value else {}
    for name in operation.path_params:
        body.pop(type(input_value).model_fields[name].alias or name, None)
    return EncodedRequest(
        method=operation.method,
        path=path,
        encoding=encoding,
        headers=headers,
        json=body or None,
    )
