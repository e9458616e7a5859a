"""Tool definitions — 5 tools across 2 categories.

Categories: Constraint checks (4), Graph (1).
Each tool has a ``<name>_impl`` function testable without the mcp package.
``build_registry()`` binds them to a workspace with their parameter schemas.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from archctl.domain.types import Layer, NamingPattern
from archctl.mcp.registry import ParameterSchema, ToolRegistry, ToolSchema

if TYPE_CHECKING:
    from archctl.infrastructure.workspace import Workspace
    from archctl.services.result import ToolResult


# ---------------------------------------------------------------------------
# Constraint checks (4)
# ---------------------------------------------------------------------------


def check_layer_dependencies_impl(workspace: Workspace, layer: str, domain: str) -> ToolResult:
    """Check a layer of one domain against the layer policy."""
    from archctl.services.architecture import ArchitectureService

    return ArchitectureService(workspace).check_layer_dependencies(layer, domain)


def check_domain_isolation_impl(
    workspace: Workspace, source_domain: str, target_domain: str
) -> ToolResult:
    """Check that one bounded context never imports another."""
    from archctl.services.architecture import ArchitectureService

    return ArchitectureService(workspace).check_domain_isolation(source_domain, target_domain)


def check_naming_conventions_impl(workspace: Workspace, pattern: str) -> ToolResult:
    """Check type-name suffixes for one convention."""
    from archctl.services.architecture import ArchitectureService

    return ArchitectureService(workspace).check_naming_conventions(pattern)


def run_all_architecture_tests_impl(workspace: Workspace) -> ToolResult:
    """Run the project's checked-in architecture suite."""
    from archctl.services.architecture import ArchitectureService

    return ArchitectureService(workspace).run_all()


# ---------------------------------------------------------------------------
# Graph (1)
# ---------------------------------------------------------------------------


def generate_dependency_graph_impl(workspace: Workspace, domain: str | None = None) -> ToolResult:
    """Export the package import graph as Graphviz DOT."""
    from archctl.services.graph import GraphService

    return GraphService(workspace).generate(domain)


# ---------------------------------------------------------------------------
# Schemas + registration
# ---------------------------------------------------------------------------

TOOL_SCHEMAS: dict[str, ToolSchema] = {
    "check_layer_dependencies": ToolSchema(
        description="Check if a layer has illegal dependencies on other layers",
        parameters=(
            ParameterSchema(
                "layer",
                allowed=tuple(layer.value for layer in Layer),
                description="Layer to check (domain, application, infrastructure)",
            ),
            ParameterSchema(
                "domain",
                description="Domain/bounded context to check (e.g., 'user', 'order')",
            ),
        ),
    ),
    "check_domain_isolation": ToolSchema(
        description="Check if domains are properly isolated from each other",
        parameters=(
            ParameterSchema(
                "sourceDomain", description="Source domain to check", target="source_domain"
            ),
            ParameterSchema(
                "targetDomain",
                description="Target domain that should not be imported",
                target="target_domain",
            ),
        ),
    ),
    "check_naming_conventions": ToolSchema(
        description="Validate naming conventions for repositories, use cases, handlers",
        parameters=(
            ParameterSchema(
                "pattern",
                allowed=tuple(pattern.value for pattern in NamingPattern),
                description="Pattern to check (repository, usecase, handler)",
            ),
        ),
    ),
    "run_all_architecture_tests": ToolSchema(
        description="Run all architecture tests defined in test/architecture",
    ),
    "generate_dependency_graph": ToolSchema(
        description="Generate a dependency graph visualization",
        parameters=(
            ParameterSchema(
                "domain",
                required=False,
                description="Optional: Specific domain to visualize",
            ),
        ),
    ),
}


def build_registry(workspace: Workspace) -> ToolRegistry:
    """Register all 5 tools, bound to *workspace*."""
    registry = ToolRegistry()

    def check_layer_dependencies(layer: str, domain: str) -> ToolResult:
        return check_layer_dependencies_impl(workspace, layer, domain)

    def check_domain_isolation(source_domain: str, target_domain: str) -> ToolResult:
        return check_domain_isolation_impl(workspace, source_domain, target_domain)

    def check_naming_conventions(pattern: str) -> ToolResult:
        return check_naming_conventions_impl(workspace, pattern)

    def run_all_architecture_tests() -> ToolResult:
        return run_all_architecture_tests_impl(workspace)

    def generate_dependency_graph(domain: str | None = None) -> ToolResult:
        return generate_dependency_graph_impl(workspace, domain)

    handlers = {
        "check_layer_dependencies": check_layer_dependencies,
        "check_domain_isolation": check_domain_isolation,
        "check_naming_conventions": check_naming_conventions,
        "run_all_architecture_tests": run_all_architecture_tests,
        "generate_dependency_graph": generate_dependency_graph,
    }
    for name, schema in TOOL_SCHEMAS.items():
        registry.register(name, schema, handlers[name])
    return registry
