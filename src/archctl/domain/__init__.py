"""Domain layer — layers, naming patterns, constraints, policy tables, error taxonomy.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
