"""MCP adapter — tool registry, tool definitions, and the stdio server."""
