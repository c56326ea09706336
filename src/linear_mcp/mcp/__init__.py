"""MCP protocol layer."""
