"""Output layer — render ToolResult for terminals or as JSON."""
