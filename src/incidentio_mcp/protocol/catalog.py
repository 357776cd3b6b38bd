"""ToolCatalog — the immutable name-to-tool registry exposed through ``tools/list``."""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterable, Iterator
from dataclasses import dataclass
from typing import Any

from incidentio_mcp.protocol.models import ToolCallResult, ToolDescriptor

ToolHandler = Callable[[dict[str, Any]], Awaitable[ToolCallResult]]


class CatalogError(ValueError):
    """A tool declaration is inconsistent or clashes with another."""


@dataclass(frozen=True)
class Tool:
    """A declared tool: its descriptor plus the coroutine that runs it."""

    descriptor: ToolDescriptor
    handler: ToolHandler

    @property
    def name(self) -> str:
        return self.descriptor.name


class ToolCatalog:
    """Fixed set of tools declared at startup.

    Schemas are descriptive only — they document the arguments for the client
    and are checked for internal consistency here, but argument validation is
    left to each tool's handler.

    Usage::

        catalog = ToolCatalog([send_alert_tool])
        catalog.descriptors()           # precomputed, read-only
        tool = catalog.get("send_alert")
    """

    def __init__(self, tools: Iterable[Tool]) -> None:
        by_name: dict[str, Tool] = {}
        for tool in tools:
            if tool.name in by_name:
                msg = f"duplicate tool name: {tool.name}"
                raise CatalogError(msg)
            validate_schema(tool.descriptor)
            by_name[tool.name] = tool
        self._tools = by_name
        self._descriptors = tuple(t.descriptor for t in by_name.values())

    def get(self, name: str) -> Tool | None:
        return self._tools.get(name)

    def names(self) -> list[str]:
        return list(self._tools)

    def descriptors(self) -> tuple[ToolDescriptor, ...]:
        """Return every descriptor, in declaration order."""
        return self._descriptors

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    def __iter__(self) -> Iterator[Tool]:
        return iter(self._tools.values())


def validate_schema(descriptor: ToolDescriptor) -> None:
    """Check that *descriptor*'s input schema is internally consistent.

    Every ``required`` field must be declared in ``properties`` and every
    declared ``default`` must be one of the property's ``enum`` values.
    """
    schema = descriptor.input_schema
    properties: dict[str, Any] = schema.get("properties", {})
    for field in schema.get("required", []):
        if field not in properties:
            msg = f"tool '{descriptor.name}': required field '{field}' missing from properties"
            raise CatalogError(msg)

    for field, prop in properties.items():
        enum = prop.get("enum")
        if enum is not None and "default" in prop and prop["default"] not in enum:
            msg = (
                f"tool '{descriptor.name}': default {prop['default']!r} for '{field}' "
                f"is not one of {enum!r}"
            )
            raise CatalogError(msg)
