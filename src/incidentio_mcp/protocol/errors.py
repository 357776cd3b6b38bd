"""Shared error types for the protocol layer.

Every failure raised while handling a request is a :class:`JsonRpcProtocolError`
carrying the wire error code; the dispatcher converts it into an error response.
"""

from __future__ import annotations

from enum import IntEnum

from pydantic import ValidationError

from incidentio_mcp.protocol.models import JsonRpcError


class ErrorCode(IntEnum):
    """JSON-RPC 2.0 error codes. These are part of the wire contract."""

    PARSE_ERROR = -32700
    METHOD_NOT_FOUND = -32601
    INVALID_PARAMS = -32602
    INTERNAL_ERROR = -32603


class ProtocolError(Exception):
    """Base error for all protocol-layer failures."""


class TransportError(ProtocolError):
    """The input stream is broken beyond recovery (e.g. bad framing)."""


class JsonRpcProtocolError(ProtocolError):
    """A failure that maps 1:1 onto a JSON-RPC error object."""

    code: ErrorCode = ErrorCode.INTERNAL_ERROR

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def to_error(self) -> JsonRpcError:
        return JsonRpcError(code=int(self.code), message=self.message)


class ParseError(JsonRpcProtocolError):
    """Request parameters could not be decoded at all."""

    code = ErrorCode.PARSE_ERROR

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Failed to parse params: {detail}")


class InvalidParamsError(JsonRpcProtocolError):
    """Parameters decoded but do not fit the method or tool."""

    code = ErrorCode.INVALID_PARAMS

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Invalid params: {detail}")


class MethodNotFoundError(JsonRpcProtocolError):
    """The top-level RPC method is not recognized."""

    code = ErrorCode.METHOD_NOT_FOUND

    def __init__(self, method: str) -> None:
        self.method = method
        super().__init__(f"Method not found: {method}")


class ToolNotFoundError(JsonRpcProtocolError):
    """Requested tool does not exist in the catalog."""

    code = ErrorCode.METHOD_NOT_FOUND

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown tool: {name}")


class InternalError(JsonRpcProtocolError):
    """A known method or tool failed while executing."""

    code = ErrorCode.INTERNAL_ERROR

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(detail)


def describe_validation_error(exc: ValidationError) -> str:
    """Flatten a pydantic error into one line, e.g. ``title: Field required``."""
    parts: list[str] = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err["loc"]) or "<root>"
        parts.append(f"{loc}: {err['msg']}")
    return "; ".join(parts)
