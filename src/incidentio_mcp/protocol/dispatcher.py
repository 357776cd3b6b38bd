"""MethodDispatcher — routes JSON-RPC requests to the MCP method handlers.

Every failure is caught at :meth:`MethodDispatcher.dispatch` and turned into
an error response; nothing raised by a handler escapes to the serve loop.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any

from opentelemetry import trace
from pydantic import BaseModel, JsonValue, ValidationError

from incidentio_mcp.protocol.errors import (
    InternalError,
    InvalidParamsError,
    JsonRpcProtocolError,
    MethodNotFoundError,
    ParseError,
    ToolNotFoundError,
    describe_validation_error,
)
from incidentio_mcp.protocol.models import (
    InitializeParams,
    JsonRpcRequest,
    JsonRpcResponse,
    ToolCallParams,
    ToolsListResult,
)
from incidentio_mcp.utils.telemetry import (
    ATTR_ERROR_CODE,
    ATTR_METHOD,
    ATTR_NOTIFICATION,
    ATTR_REQUEST_ID,
    ATTR_TOOL_NAME,
    get_tracer,
)

if TYPE_CHECKING:
    from incidentio_mcp.protocol.catalog import ToolCatalog
    from incidentio_mcp.protocol.session import Session

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)

MethodHandler = Callable[[Any, "Session"], Awaitable["BaseModel | None"]]

INITIALIZE = "initialize"
INITIALIZED = "notifications/initialized"
INITIALIZED_LEGACY = "initialized"
TOOLS_LIST = "tools/list"
TOOLS_CALL = "tools/call"


class MethodDispatcher:
    """Maps method names to handlers and produces responses.

    Usage::

        dispatcher = MethodDispatcher(catalog)
        response = await dispatcher.dispatch(request, session)
        if response is not None:        # None for notifications
            writer.write(response)
    """

    def __init__(self, catalog: ToolCatalog) -> None:
        self._catalog = catalog
        self._tools_list = ToolsListResult(tools=list(catalog.descriptors()))
        self._handlers: dict[str, MethodHandler] = {
            INITIALIZE: self._initialize,
            INITIALIZED: self._initialized,
            INITIALIZED_LEGACY: self._initialized,
            TOOLS_LIST: self._list_tools,
            TOOLS_CALL: self._call_tool,
        }

    @property
    def methods(self) -> list[str]:
        return list(self._handlers)

    async def dispatch(self, request: JsonRpcRequest, session: Session) -> JsonRpcResponse | None:
        """Handle *request*; return its response, or ``None`` for notifications."""
        logger.debug("Handling request: %s (id=%r)", request.method, request.id)
        with _tracer.start_as_current_span("mcp.dispatch") as span:
            span.set_attribute(ATTR_METHOD, request.method)
            span.set_attribute(ATTR_NOTIFICATION, request.is_notification)
            if request.id is not None:
                span.set_attribute(ATTR_REQUEST_ID, request.id)
            try:
                result = await self._invoke(request, session)
            except JsonRpcProtocolError as exc:
                span.set_attribute(ATTR_ERROR_CODE, int(exc.code))
                logger.warning("%s failed (%d): %s", request.method, exc.code, exc.message)
                return self._error_response(request, exc)
            except Exception as exc:
                logger.exception("Unhandled error in %s", request.method)
                error = InternalError(f"Internal error: {exc}")
                span.set_attribute(ATTR_ERROR_CODE, int(error.code))
                return self._error_response(request, error)

        if request.is_notification:
            return None
        payload: dict[str, Any] = {}
        if result is not None:
            payload = result.model_dump(mode="json", by_alias=True, exclude_none=True)
        return JsonRpcResponse(id=request.id, result=payload)

    async def _invoke(self, request: JsonRpcRequest, session: Session) -> BaseModel | None:
        handler = self._handlers.get(request.method)
        if handler is None:
            raise MethodNotFoundError(request.method)
        return await handler(request.params, session)

    @staticmethod
    def _error_response(
        request: JsonRpcRequest, exc: JsonRpcProtocolError
    ) -> JsonRpcResponse | None:
        if request.is_notification:
            return None
        return JsonRpcResponse(id=request.id, error=exc.to_error())

    # -- method handlers -----------------------------------------------------

    async def _initialize(self, params: JsonValue, session: Session) -> BaseModel:
        try:
            init = InitializeParams() if params is None else InitializeParams.model_validate(params)
        except ValidationError as exc:
            raise ParseError(describe_validation_error(exc)) from exc
        return session.initialize(init)

    async def _initialized(self, params: JsonValue, session: Session) -> None:
        session.acknowledge()

    async def _list_tools(self, params: JsonValue, session: Session) -> BaseModel:
        return self._tools_list

    async def _call_tool(self, params: JsonValue, session: Session) -> BaseModel:
        try:
            call = ToolCallParams.model_validate(params)
        except ValidationError as exc:
            raise InvalidParamsError(describe_validation_error(exc)) from exc

        trace.get_current_span().set_attribute(ATTR_TOOL_NAME, call.name)
        tool = self._catalog.get(call.name)
        if tool is None:
            raise ToolNotFoundError(call.name)
        return await tool.handler(call.arguments or {})
