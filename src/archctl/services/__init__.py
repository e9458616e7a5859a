"""Service layer — encoding, interpretation, and orchestration returning ToolResult.

Services may import from domain and infrastructure layers.
They must never import from commands, output, or mcp.
"""
