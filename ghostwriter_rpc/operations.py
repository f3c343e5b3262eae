"""
Operation descriptor - one named, schema-bound HTTP call contract.
"""

import string
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pydantic import BaseModel, TypeAdapter, ValidationError

from .errors import InputValidationError, field_errors_from_pydantic

HTTP_METHODS = frozenset({"GET", "POST", "PATCH", "DELETE"})


class Encoding(str, Enum):
    """How an operation's remaining input fields are put on the wire."""

    JSON = "json"
    MULTIPART = "multipart"
    AUTO = "auto"  # multipart only when the actual input carries a file


class OperationKind(str, Enum):
    QUERY = "query"
    MUTATION = "mutation"


@dataclass(frozen=True)
class Operation:
    """Immutable catalog entry.

    Attributes:
        name: Dotted operation name, e.g. ``ghostwriter.create``.
        method: HTTP verb.
        path: Path template relative to the API base URL; ``{field}`` placeholders
            are filled from the input attribute of the same name.
        output: Type the envelope ``data`` must validate against.
        input_model: Pydantic model for the Input Value, or None for no input.
        encoding: Body encoding mode.
        paginated: Whether the result is a Page with envelope meta.
        long_running: Whether the call uses the long timeout.
        description: One-line summary.
    """

    name: str
    method: str
    path: str
    output: Any = Any
    input_model: type[BaseModel] | None = None
    encoding: Encoding = Encoding.JSON
    paginated: bool = False
    long_running: bool = False
    description: str = ""
    output_adapter: TypeAdapter = field(init=False, repr=False, compare=False)
    path_params: tuple[str, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.method not in HTTP_METHODS:
            raise ValueError(f"{self.name}: unsupported HTTP method {self.method}")
        params = tuple(fname for _, fname, _, _ in string.Formatter().parse(self.path) if fname)
        if params and self.input_model is None:
            raise ValueError(f"{self.name}: path parameters {params} need an input model")
        for param in params:
            if param not in self.input_model.model_fields:
                raise ValueError(f"{self.name}: path parameter {param!r} is not an input field")
        object.__setattr__(self, "path_params", params)
        object.__setattr__(self, "output_adapter", TypeAdapter(self.output))

    @property
    def group(self) -> str:
        return self.name.split(".", 1)[0] if "." in self.name else ""

    @property
    def kind(self) -> OperationKind:
        return OperationKind.QUERY if self.method == "GET" else OperationKind.MUTATION

    def validate_input(self, payload: Any = None) -> BaseModel | None:
        """Validate a raw payload into this operation's Input Value.

        Args:
            payload: Mapping, model instance, or None.

        Returns:
            BaseModel | None: The validated input, or None for input-less operations.

        Raises:
            InputValidationError: If the payload does not satisfy the input model.
        """
        if self.input_model is None:
            if payload:
                raise InputValidationError(f"Operation {self.name} takes no input")
            return None

        if isinstance(payload, self.input_model):
            return payload

        try:
            return self.input_model.model_validate(payload if payload is not None else {})
        except ValidationError as e:
            field_errors = field_errors_from_pydantic(e.errors())
            summary = "; ".join(f"{fe.field}: {fe.message}" for fe in field_errors)
            raise InputValidationError(f"Invalid input for {self.name}: {summary}", field_errors) from e
