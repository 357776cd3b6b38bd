"""Server-side stdio transport: reads requests and writes responses.

Two framings are supported on the same byte streams:

* ``ndjson``: one JSON message per line (the MCP stdio default).
* ``content-length``: LSP-style ``Content-Length: N`` header, blank line,
  then exactly N bytes of JSON.

Blocking reads run on daemon threads. A read parked on an idle stdin must
not keep the interpreter alive after Ctrl-C.
"""

from __future__ import annotations

import asyncio
import json
import logging
import threading
from collections.abc import AsyncIterator, Callable
from enum import Enum
from typing import Any, BinaryIO, TypeVar

from pydantic import ValidationError

from incidentio_mcp.protocol.errors import TransportError, describe_validation_error
from incidentio_mcp.protocol.models import JsonRpcRequest, JsonRpcResponse

logger = logging.getLogger(__name__)

_CONTENT_LENGTH = b"content-length"

_T = TypeVar("_T")


class Framing(str, Enum):
    NDJSON = "ndjson"
    CONTENT_LENGTH = "content-length"


class MessageReader:
    """Reads framed messages from a binary stream and decodes them into requests.

    Iterating yields :class:`JsonRpcRequest` objects until end of stream.
    Messages that are not a structurally valid request are logged and
    skipped, since no id can be recovered to answer them.
    """

    def __init__(self, stream: BinaryIO, framing: Framing = Framing.NDJSON) -> None:
        self._stream = stream
        self._framing = framing

    def __aiter__(self) -> AsyncIterator[JsonRpcRequest]:
        return self._requests()

    async def _requests(self) -> AsyncIterator[JsonRpcRequest]:
        while True:
            raw = await self.read_message()
            if raw is None:
                return
            request = decode_request(raw)
            if request is not None:
                yield request

    async def read_message(self) -> bytes | None:
        """Return the next raw message body, or ``None`` at end of stream."""
        if self._framing is Framing.CONTENT_LENGTH:
            return await self._read_content_length()
        return await self._read_line()

    async def _read_line(self) -> bytes | None:
        while True:
            line = await _in_daemon_thread(self._stream.readline)
            if not line:
                return None
            line = line.strip()
            if line:
                return line

    async def _read_content_length(self) -> bytes | None:
        length: int | None = None
        saw_header = False
        while True:
            line = await _in_daemon_thread(self._stream.readline)
            if not line:
                if saw_header:
                    msg = "Stream closed inside message headers"
                    raise TransportError(msg)
                return None
            line = line.strip()
            if not line:
                if saw_header:
                    break
                continue
            saw_header = True
            name, sep, value = line.partition(b":")
            if sep and name.strip().lower() == _CONTENT_LENGTH:
                try:
                    length = int(value.strip())
                except ValueError as exc:
                    msg = f"Invalid Content-Length header: {value.strip()!r}"
                    raise TransportError(msg) from exc

        if length is None or length < 0:
            msg = "Message headers without a valid Content-Length"
            raise TransportError(msg)

        body = await _in_daemon_thread(self._read_exact, length)
        if len(body) < length:
            msg = f"Stream closed after {len(body)} of {length} body bytes"
            raise TransportError(msg)
        return body

    def _read_exact(self, length: int) -> bytes:
        chunks: list[bytes] = []
        remaining = length
        while remaining > 0:
            chunk = self._stream.read(remaining)
            if not chunk:
                break
            chunks.append(chunk)
            remaining -= len(chunk)
        return b"".join(chunks)


class ResponseWriter:
    """Serializes responses onto a binary stream using the reader's framing."""

    def __init__(self, stream: BinaryIO, framing: Framing = Framing.NDJSON) -> None:
        self._stream = stream
        self._framing = framing

    def write(self, response: JsonRpcResponse) -> None:
        body = json.dumps(response.to_wire()).encode("ascii")
        if self._framing is Framing.CONTENT_LENGTH:
            self._stream.write(f"Content-Length: {len(body)}\r\n\r\n".encode("ascii") + body)
        else:
            self._stream.write(body + b"\n")
        self._stream.flush()
        logger.debug("Sent response: %s", body.decode("ascii"))


def decode_request(raw: bytes) -> JsonRpcRequest | None:
    """Decode one raw message; log and return ``None`` if it is not a request."""
    logger.debug("Received: %s", raw.decode("utf-8", errors="replace"))
    try:
        data = json.loads(raw)
    except (ValueError, RecursionError) as exc:
        logger.warning("Failed to parse request: %s", exc)
        return None

    if not isinstance(data, dict):
        logger.warning("Ignoring non-object message of type %s", type(data).__name__)
        return None

    try:
        return JsonRpcRequest.model_validate(data)
    except ValidationError as exc:
        logger.warning("Ignoring malformed request: %s", describe_validation_error(exc))
        return None
    except RecursionError:
        logger.warning("Ignoring request nested too deeply to validate")
        return None


async def _in_daemon_thread(func: Callable[..., _T], *args: Any) -> _T:
    """Run blocking *func* on a daemon thread and await its outcome."""
    loop = asyncio.get_running_loop()
    future: asyncio.Future[_T] = loop.create_future()

    def settle(result: Any, error: BaseException | None) -> None:
        if future.done():
            return
        if error is not None:
            future.set_exception(error)
        else:
            future.set_result(result)

    def run() -> None:
        result: Any = None
        error: BaseException | None = None
        try:
            result = func(*args)
        except Exception as exc:
            error = exc
        try:
            loop.call_soon_threadsafe(settle, result, error)
        except RuntimeError:
            logger.debug("Event loop closed before a blocking read returned")

    threading.Thread(target=run, name="incidentio-mcp-reader", daemon=True).start()
    return await future
