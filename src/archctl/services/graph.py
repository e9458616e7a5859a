"""GraphService — package dependency graph export.

Scans the project's imports into a NetworkX DiGraph, optionally narrows
it to one bounded context, flags edges that break the layer policy or
cross a domain boundary, and writes Graphviz DOT into the project root.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import networkx as nx

from archctl.domain.errors import ArtifactIOError, ParameterError
from archctl.domain.policy import is_forbidden, is_valid_domain_name
from archctl.domain.types import Layer
from archctl.services.base import BaseService
from archctl.services.result import ToolResult

_EDGE_STYLES = {
    "layer": 'color="red" penwidth=2',
    "cross_domain": 'color="orange" style="dashed"',
}


def edge_violation(source: dict[str, Any], target: dict[str, Any]) -> str | None:
    """Classify an import edge from node attributes.

    Returns ``"layer"`` when a package imports a layer its own layer
    forbids within the same domain, ``"cross_domain"`` when it reaches
    into another bounded context, else None.
    """
    src_domain, tgt_domain = source.get("domain"), target.get("domain")
    if src_domain is None or tgt_domain is None:
        return None
    if src_domain != tgt_domain:
        return "cross_domain"
    src_layer, tgt_layer = source.get("layer"), target.get("layer")
    if src_layer and tgt_layer and is_forbidden(Layer(src_layer), Layer(tgt_layer)):
        return "layer"
    return None


class GraphService(BaseService):
    """Builds and exports the package import graph."""

    def generate(self, domain: str | None = None) -> ToolResult:
        """Write the dependency graph (whole project or one domain) as DOT."""
        if domain is not None and not is_valid_domain_name(domain):
            msg = f"domain is not a valid domain name: {domain!r}"
            raise ParameterError(msg, detail={"domain": domain})

        engine = self._workspace.new_graph_engine()
        g = engine.graph
        if domain:
            members = {n for n, attrs in g.nodes(data=True) if attrs.get("domain") == domain}
            keep = set(members)
            for node in members:
                keep.update(g.successors(node))
            subject: nx.DiGraph = g.subgraph(keep).copy()
        else:
            subject = g

        violations: dict[str, int] = {"layer": 0, "cross_domain": 0}
        for src, tgt, attrs in subject.edges(data=True):
            kind = edge_violation(subject.nodes[src], subject.nodes[tgt])
            attrs["violation"] = kind
            if kind:
                violations[kind] += 1

        path = self._output_path(domain)
        try:
            path.write_text(self._to_dot(subject, name=domain or "architecture"), encoding="utf-8")
        except OSError as exc:
            msg = f"Could not write dependency graph to {path}: {exc}"
            raise ArtifactIOError(msg, detail={"path": str(path)}) from exc

        nodes, edges = subject.number_of_nodes(), subject.number_of_edges()
        lines = [
            f"Dependency graph written to: {path}",
            f"{nodes} packages, {edges} imports",
            f"{violations['layer']} layer violations, "
            f"{violations['cross_domain']} cross-domain imports",
        ]
        return ToolResult(
            content="\n".join(lines),
            op="generate_dependency_graph",
            data={
                "path": str(path),
                "module": engine.module_path,
                "domain": domain,
                "node_count": nodes,
                "edge_count": edges,
                "layer_violations": violations["layer"],
                "cross_domain_imports": violations["cross_domain"],
            },
        )

    # ── Private helpers ───────────────────────────────────────────────

    def _output_path(self, domain: str | None) -> Path:
        output = Path(self._workspace.settings.graph.output)
        if domain:
            output = output.with_name(f"{output.stem}-{domain}{output.suffix}")
        if not output.is_absolute():
            output = self._workspace.project_root / output
        return output

    @staticmethod
    def _to_dot(g: nx.DiGraph, *, name: str) -> str:
        """Generate Graphviz DOT notation, clustering packages by domain."""
        lines = [f'digraph "{name}" {{', "  rankdir=LR;", "  node [shape=box];"]

        clusters: dict[str | None, list[str]] = {}
        for node_id, attrs in g.nodes(data=True):
            clusters.setdefault(attrs.get("domain"), []).append(node_id)

        for domain in sorted(clusters, key=lambda d: (d is None, d or "")):
            indent = "  "
            if domain is not None:
                lines.append(f'  subgraph "cluster_{domain}" {{')
                lines.append(f'    label="{domain}";')
                indent = "    "
            for node_id in sorted(clusters[domain]):
                attrs = g.nodes[node_id]
                label = node_id.replace('"', '\\"')
                extra = ' style="dotted"' if attrs.get("external") else ""
                layer = attrs.get("layer") or ""
                lines.append(f'{indent}"{label}" [label="{label}" layer="{layer}"{extra}];')
            if domain is not None:
                lines.append("  }")

        for src, tgt, attrs in sorted(g.edges(data=True), key=lambda e: (e[0], e[1])):
            style = _EDGE_STYLES.get(attrs.get("violation") or "", "")
            suffix = f" [{style}]" if style else ""
            lines.append(f'  "{src}" -> "{tgt}"{suffix};')

        lines.append("}")
        return "\n".join(lines) + "\n"
