"""incident.io alert MCP server — exposes alert delivery as an MCP tool over stdio."""

from __future__ import annotations

from typing import TYPE_CHECKING

__version__ = "0.1.0"

if TYPE_CHECKING:
    from incidentio_mcp.config import ServerConfig as ServerConfig
    from incidentio_mcp.server import MCPServer as MCPServer

_LAZY_EXPORTS = {
    "MCPServer": "incidentio_mcp.server",
    "ServerConfig": "incidentio_mcp.config",
}


def __getattr__(name: str) -> object:
    module_path = _LAZY_EXPORTS.get(name)
    if module_path is not None:
        import importlib

        mod = importlib.import_module(module_path)
        return getattr(mod, name)
    raise AttributeError(f"module 'incidentio_mcp' has no attribute {name!r}")
