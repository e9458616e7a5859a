"""PackageGraphEngine — lazy-built NetworkX graph of Go package imports.

Nodes are package directories relative to the project root, tagged with
the bounded context (``domain``) and ``layer`` they belong to when they
live under ``<namespace_root>/<domain>/<layer>``. Edges are imports.
The tree is scanned once per engine; build a new engine to see changes.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import Any

import networkx as nx

from archctl.domain.types import Layer
from archctl.infrastructure.goscan import read_module_path, scan_packages

type _Graph = nx.DiGraph

_LAYERS = {layer.value for layer in Layer}


def classify(rel_dir: str, namespace_root: str) -> dict[str, Any]:
    """Node attributes for a package directory.

    Examples:
        >>> classify("internal/user/domain/model", "internal")
        {'domain': 'user', 'layer': 'domain'}
        >>> classify("cmd/api", "internal")
        {'domain': None, 'layer': None}
    """
    parts = rel_dir.split("/")
    if len(parts) < 2 or parts[0] != namespace_root:
        return {"domain": None, "layer": None}
    layer = parts[2] if len(parts) >= 3 and parts[2] in _LAYERS else None
    return {"domain": parts[1], "layer": layer}


class PackageGraphEngine:
    """Lazy-loading import graph backed by a scan of the project's Go files."""

    def __init__(
        self,
        project_root: Path,
        *,
        namespace_root: str = "internal",
        exclude: Iterable[str] = (),
        include_external: bool = False,
    ) -> None:
        self._root = project_root
        self._namespace_root = namespace_root
        self._exclude = tuple(exclude)
        self._include_external = include_external
        self._graph: _Graph | None = None
        self.module_path: str | None = None

    @property
    def graph(self) -> _Graph:
        """Return the graph, scanning the project on first access."""
        if self._graph is None:
            self._graph = self._build()
        return self._graph

    def _build(self) -> _Graph:
        """Scan packages, then add one edge per import.

        Intra-module imports become edges between package nodes (a target
        package that was not scanned, e.g. generated code, still gets a
        node). Third-party imports are only kept with ``include_external``.
        """
        module = read_module_path(self._root)
        self.module_path = module
        packages = scan_packages(self._root, exclude=self._exclude)
        prefix = module + "/"

        g: _Graph = nx.DiGraph()
        for rel_dir, pkg in packages.items():
            g.add_node(
                rel_dir,
                package=pkg.name,
                external=False,
                **classify(rel_dir, self._namespace_root),
            )

        for rel_dir, pkg in packages.items():
            for imp in sorted(pkg.imports):
                if imp == module or imp.startswith(prefix):
                    target = imp[len(prefix) :] if imp != module else "."
                    if target not in g:
                        g.add_node(
                            target,
                            package=target.rsplit("/", 1)[-1],
                            external=False,
                            **classify(target, self._namespace_root),
                        )
                    g.add_edge(rel_dir, target)
                elif self._include_external:
                    if imp not in g:
                        g.add_node(imp, package=imp, external=True, domain=None, layer=None)
                    g.add_edge(rel_dir, imp)
        return g
