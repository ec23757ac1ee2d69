"""DayBoard MCP server."""
