"""Tool table, argument models, handler bindings and dispatch."""

from .schemas import ToolDescriptor, build_tool_table

__all__ = ["ToolDescriptor", "build_tool_table"]
