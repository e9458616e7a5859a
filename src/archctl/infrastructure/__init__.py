"""Infrastructure layer — code generation, process execution, Go source scanning.

This layer depends on domain, config, and third-party libs (NetworkX, structlog).
It must never import from services, mcp, commands, or output.
"""
