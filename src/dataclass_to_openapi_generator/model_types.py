"""Operation metadata supplied by the routing layer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class ResponseHeader:
    """A header sent with a response.

    Without a model the header is documented as a string.
    """

    name: str
    description: str = ""
    model: Optional[Any] = None


@dataclass(frozen=True)
class OperationResponse:
    """An additional response an operation can produce."""

    code: str
    description: str = ""
    model: Optional[Any] = None
    headers: tuple[ResponseHeader, ...] = ()


@dataclass(frozen=True)
class OperationInfo:
    """Operation-level metadata for ``Generator.add_operation``.

    Attributes:
        id (str): Operation identifier, unique in the document.
        summary (str): Short summary of the operation.
        description (str): Longer description of the operation.
        deprecated (bool): Whether the operation is deprecated.
        status_code (int): Status code of the success response.
        status_description (str): Description of the success response.
        responses (tuple[OperationResponse, ...]): Other declared responses.
        headers (tuple[ResponseHeader, ...]): Headers of the success response.
    """

    id: str
    summary: str = ""
    description: str = ""
    deprecated: bool = False
    status_code: int = 200
    status_description: str = ""
    responses: tuple[OperationResponse, ...] = ()
    headers: tuple[ResponseHeader, ...] = ()
