"""Line-oriented scanner for Go package imports.

Reads only what the dependency graph needs: the ``module`` directive of
``go.mod`` and the import declarations at the top of each non-test
``.go`` file. This is deliberately not a Go parser; scanning stops at
the first top-level declaration after the imports.
"""

from __future__ import annotations

import os
import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from archctl.domain.errors import ProjectError

_MODULE_RE = re.compile(r"^\s*module\s+(\S+)")
_PACKAGE_RE = re.compile(r"^\s*package\s+(\w+)")
_SINGLE_IMPORT_RE = re.compile(r'^\s*import\s+(?:[\w.]+\s+)?"([^"]+)"')
_BLOCK_START_RE = re.compile(r"^\s*import\s*\(")
_BLOCK_ENTRY_RE = re.compile(r'^\s*(?:[\w.]+\s+)?"([^"]+)"')
_DECL_RE = re.compile(r"^(func|type|var|const)\b")

_SKIP_DIRS = {"vendor", "testdata", "node_modules"}


@dataclass
class GoPackage:
    """Non-test Go files of one directory and the imports they declare."""

    rel_dir: str
    name: str
    files: list[str] = field(default_factory=list)
    imports: set[str] = field(default_factory=set)


def read_module_path(project_root: Path) -> str:
    """Return the module path declared in ``<project_root>/go.mod``."""
    go_mod = project_root / "go.mod"
    try:
        text = go_mod.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        msg = f"No go.mod found in {project_root}"
        raise ProjectError(msg, detail={"project_root": str(project_root)}) from exc
    for line in text.splitlines():
        match = _MODULE_RE.match(line)
        if match:
            return match.group(1).strip('"')
    msg = f"go.mod in {project_root} has no module directive"
    raise ProjectError(msg, detail={"project_root": str(project_root)})


def parse_imports(source: str) -> tuple[str | None, list[str]]:
    """Extract ``(package_name, import_paths)`` from Go source text."""
    package: str | None = None
    imports: list[str] = []
    in_block = False
    in_comment = False

    for raw in source.splitlines():
        line = raw.strip()
        if in_comment:
            if "*/" in line:
                in_comment = False
                line = line.split("*/", 1)[1].strip()
            else:
                continue
        if line.startswith("/*") and "*/" not in line:
            in_comment = True
            continue
        if not line or line.startswith("//"):
            continue

        if in_block:
            if line.startswith(")"):
                in_block = False
                continue
            entry = _BLOCK_ENTRY_RE.match(line)
            if entry:
                imports.append(entry.group(1))
            continue

        if package is None:
            pkg = _PACKAGE_RE.match(line)
            if pkg:
                package = pkg.group(1)
            continue

        if _BLOCK_START_RE.match(line):
            in_block = True
            # ``import ("fmt")`` on one line
            entry = _BLOCK_ENTRY_RE.match(line.split("(", 1)[1])
            if entry:
                imports.append(entry.group(1))
            if line.rstrip().endswith(")"):
                in_block = False
            continue
        single = _SINGLE_IMPORT_RE.match(line)
        if single:
            imports.append(single.group(1))
            continue
        if _DECL_RE.match(line):
            break

    return package, imports


def scan_packages(project_root: Path, *, exclude: Iterable[str] = ()) -> dict[str, GoPackage]:
    """Scan every non-test Go package under *project_root*.

    Directories named ``vendor``/``testdata`` or starting with ``.``/``_``
    are skipped, as are the relative paths listed in *exclude*.
    Keys are POSIX directory paths relative to the root (``"."`` for
    the root package).
    """
    excluded = {e.strip("/") for e in exclude}
    packages: dict[str, GoPackage] = {}

    for dirpath, dirnames, filenames in os.walk(project_root):
        rel = Path(dirpath).relative_to(project_root).as_posix()
        dirnames[:] = sorted(
            d
            for d in dirnames
            if d not in _SKIP_DIRS
            and not d.startswith((".", "_"))
            and (d if rel == "." else f"{rel}/{d}") not in excluded
        )
        for filename in sorted(filenames):
            if not filename.endswith(".go") or filename.endswith("_test.go"):
                continue
            path = Path(dirpath) / filename
            source = path.read_text(encoding="utf-8", errors="replace")
            name, imports = parse_imports(source)
            if name is None:
                continue
            pkg = packages.setdefault(rel, GoPackage(rel_dir=rel, name=name))
            pkg.files.append(filename)
            pkg.imports.update(imports)

    return packages
