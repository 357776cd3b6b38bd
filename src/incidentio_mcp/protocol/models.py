"""MCP models — JSON-RPC 2.0 messages, handshake payloads and tool definitions.

Implements the message format used by the Model Context Protocol for the
``initialize`` handshake, tool discovery (``tools/list``) and execution
(``tools/call``).
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field, JsonValue, StrictFloat, StrictInt, StrictStr, model_validator

# Request ids are echoed verbatim, so no coercion between str and numbers.
RequestId = StrictInt | StrictFloat | StrictStr

# ---------------------------------------------------------------------------
# JSON-RPC 2.0 envelope
# ---------------------------------------------------------------------------


class JsonRpcRequest(BaseModel):
    """A JSON-RPC 2.0 request message.

    A request without an ``id`` (or with a ``null`` one) is a notification
    and never gets a response.
    """

    jsonrpc: str = "2.0"
    method: str
    params: JsonValue = None
    id: RequestId | None = None

    @property
    def is_notification(self) -> bool:
        return self.id is None


class JsonRpcError(BaseModel):
    """A JSON-RPC 2.0 error object."""

    code: int
    message: str
    data: Any = None


class JsonRpcResponse(BaseModel):
    """A JSON-RPC 2.0 response message."""

    jsonrpc: str = "2.0"
    id: RequestId | None = None
    result: dict[str, Any] | None = None
    error: JsonRpcError | None = None

    @model_validator(mode="after")
    def _one_of_result_or_error(self) -> JsonRpcResponse:
        if self.result is not None and self.error is not None:
            msg = "response cannot carry both 'result' and 'error'"
            raise ValueError(msg)
        return self

    def to_wire(self) -> dict[str, Any]:
        """Serialize for the wire: ``id`` always present, exactly one of result/error."""
        data: dict[str, Any] = {"jsonrpc": self.jsonrpc, "id": self.id}
        if self.error is not None:
            data["error"] = self.error.model_dump(exclude_none=True)
        else:
            data["result"] = self.result if self.result is not None else {}
        return data


# ---------------------------------------------------------------------------
# MCP handshake payloads
# ---------------------------------------------------------------------------


class ClientInfo(BaseModel):
    """Identity the client reports in ``initialize``."""

    name: str = ""
    version: str = ""


class InitializeParams(BaseModel):
    """Parameters of the ``initialize`` request."""

    model_config = {"populate_by_name": True}

    protocol_version: str | None = Field(default=None, alias="protocolVersion")
    capabilities: dict[str, JsonValue] = Field(default_factory=dict)
    client_info: ClientInfo | None = Field(default=None, alias="clientInfo")


class ToolsCapability(BaseModel):
    model_config = {"populate_by_name": True}

    list_changed: bool = Field(default=False, alias="listChanged")


class ServerCapabilities(BaseModel):
    tools: ToolsCapability = Field(default_factory=ToolsCapability)


class ServerInfo(BaseModel):
    name: str
    version: str


class InitializeResult(BaseModel):
    """Result of the ``initialize`` handshake."""

    model_config = {"populate_by_name": True}

    protocol_version: str = Field(alias="protocolVersion")
    capabilities: ServerCapabilities
    server_info: ServerInfo = Field(alias="serverInfo")


# ---------------------------------------------------------------------------
# Tools
# ---------------------------------------------------------------------------


class ToolDescriptor(BaseModel):
    """A tool definition as returned by ``tools/list``."""

    model_config = {"populate_by_name": True, "frozen": True}

    name: str
    description: str = ""
    input_schema: dict[str, Any] = Field(default_factory=dict, alias="inputSchema")


class ToolsListResult(BaseModel):
    """Result of ``tools/list``."""

    tools: list[ToolDescriptor]


class ToolCallParams(BaseModel):
    """Parameters of ``tools/call`` — which tool, and its raw arguments."""

    name: str
    arguments: dict[str, JsonValue] | None = None


class TextContent(BaseModel):
    """Plain text content block."""

    type: Literal["text"] = "text"
    text: str


class ToolCallResult(BaseModel):
    """Result of ``tools/call``."""

    content: list[TextContent]

    @classmethod
    def from_text(cls, text: str) -> ToolCallResult:
        """Create a result with a single text content block."""
        return cls(content=[TextContent(text=text)])
