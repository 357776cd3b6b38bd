"""Tests for ToolCatalog construction and lookups."""

from typing import Any

import pytest

from incidentio_mcp.protocol.catalog import CatalogError, Tool, ToolCatalog, validate_schema
from incidentio_mcp.protocol.models import ToolCallResult, ToolDescriptor


async def _noop(arguments: dict[str, Any]) -> ToolCallResult:
    return ToolCallResult.from_text("ok")


def _tool(name: str, schema: dict[str, Any] | None = None) -> Tool:
    descriptor = ToolDescriptor(
        name=name,
        description=f"{name} tool",
        input_schema=schema or {"type": "object", "properties": {}},
    )
    return Tool(descriptor=descriptor, handler=_noop)


class TestToolCatalog:
    def test_lookup(self) -> None:
        catalog = ToolCatalog([_tool("a"), _tool("b")])
        assert "a" in catalog
        assert "missing" not in catalog
        assert len(catalog) == 2
        tool = catalog.get("b")
        assert tool is not None
        assert tool.name == "b"
        assert catalog.get("missing") is None

    def test_preserves_declaration_order(self) -> None:
        catalog = ToolCatalog([_tool("z"), _tool("a")])
        assert catalog.names() == ["z", "a"]
        assert [d.name for d in catalog.descriptors()] == ["z", "a"]
        assert [t.name for t in catalog] == ["z", "a"]

    def test_descriptors_computed_once(self) -> None:
        catalog = ToolCatalog([_tool("a")])
        assert catalog.descriptors() is catalog.descriptors()

    def test_duplicate_names_rejected(self) -> None:
        with pytest.raises(CatalogError, match="duplicate"):
            ToolCatalog([_tool("a"), _tool("a")])

    def test_inconsistent_schema_rejected(self) -> None:
        bad = _tool("bad", {"type": "object", "properties": {}, "required": ["title"]})
        with pytest.raises(CatalogError, match="title"):
            ToolCatalog([bad])

    def test_catalog_error_is_value_error(self) -> None:
        assert issubclass(CatalogError, ValueError)


class TestValidateSchema:
    def test_required_subset_of_properties(self) -> None:
        descriptor = ToolDescriptor(
            name="t",
            input_schema={
                "type": "object",
                "properties": {"title": {"type": "string"}},
                "required": ["title"],
            },
        )
        validate_schema(descriptor)

    def test_default_must_be_in_enum(self) -> None:
        descriptor = ToolDescriptor(
            name="t",
            input_schema={
                "type": "object",
                "properties": {
                    "status": {"type": "string", "enum": ["firing", "resolved"], "default": "open"},
                },
            },
        )
        with pytest.raises(CatalogError, match="open"):
            validate_schema(descriptor)

    def test_empty_schema_is_fine(self) -> None:
        validate_schema(ToolDescriptor(name="t"))
