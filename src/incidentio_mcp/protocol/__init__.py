"""Protocol layer — JSON-RPC models, session, tool catalog, dispatch and transport."""

from incidentio_mcp.protocol.catalog import CatalogError, Tool, ToolCatalog
from incidentio_mcp.protocol.dispatcher import MethodDispatcher
from incidentio_mcp.protocol.errors import (
    ErrorCode,
    InternalError,
    InvalidParamsError,
    JsonRpcProtocolError,
    MethodNotFoundError,
    ParseError,
    ProtocolError,
    ToolNotFoundError,
    TransportError,
)
from incidentio_mcp.protocol.models import JsonRpcError, JsonRpcRequest, JsonRpcResponse, ToolDescriptor
from incidentio_mcp.protocol.session import Session, SessionState
from incidentio_mcp.protocol.transport import Framing, MessageReader, ResponseWriter

__all__ = [
    "CatalogError",
    "ErrorCode",
    "Framing",
    "InternalError",
    "InvalidParamsError",
    "JsonRpcError",
    "JsonRpcProtocolError",
    "JsonRpcRequest",
    "JsonRpcResponse",
    "MessageReader",
    "MethodDispatcher",
    "MethodNotFoundError",
    "ParseError",
    "ProtocolError",
    "ResponseWriter",
    "Session",
    "SessionState",
    "Tool",
    "ToolCatalog",
    "ToolDescriptor",
    "ToolNotFoundError",
    "TransportError",
]
