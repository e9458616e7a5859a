"""Architecture vocabulary enums.

Layers are the dependency-direction tiers of a hexagonal project;
naming patterns are the conventions ``check_naming_conventions`` knows about.
"""

from __future__ import annotations

from enum import StrEnum


class Layer(StrEnum):
    """Dependency tiers, innermost first."""

    DOMAIN = "domain"
    APPLICATION = "application"
    INFRASTRUCTURE = "infrastructure"


class NamingPattern(StrEnum):
    """Supported type-naming conventions."""

    REPOSITORY = "repository"
    USECASE = "usecase"
    HANDLER = "handler"

