"""Typed builder for generated Go architecture tests.

Two pieces:
- :class:`ArchRule` — one goarchtest fluent chain (namespace, direction,
  predicate) rendered with properly quoted Go string literals.
- :class:`GoTestFileBuilder` — assembles package clause, imports, and
  test functions into a complete ``_test.go`` file.

User-supplied values only ever reach the output through :func:`go_quote`.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Literal

PROJECT_PATH_ENV = "GOARCHTEST_PROJECT_PATH"

_IDENT_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
_INDENT = "\t"

Predicate = Literal["HaveDependencyOn", "HaveNameEndingWith"]


def go_quote(value: str) -> str:
    """Render *value* as a Go interpreted string literal.

    Examples:
        >>> go_quote("internal/user")
        '"internal/user"'
        >>> go_quote('a"b')
        '"a\\\\"b"'
    """
    out: list[str] = ['"']
    for ch in value:
        if ch == "\\":
            out.append("\\\\")
        elif ch == '"':
            out.append('\\"')
        elif ch == "\n":
            out.append("\\n")
        elif ch == "\t":
            out.append("\\t")
        elif ch == "\r":
            out.append("\\r")
        elif ord(ch) < 0x20 or ord(ch) == 0x7F:
            out.append(f"\\x{ord(ch):02x}")
        else:
            out.append(ch)
    out.append('"')
    return "".join(out)


def _check_ident(name: str) -> str:
    if not _IDENT_RE.match(name):
        msg = f"Not a Go identifier: {name!r}"
        raise ValueError(msg)
    return name


@dataclass(frozen=True)
class ArchRule:
    """A single ``goarchtest`` assertion.

    Attributes:
        name: Subtest name shown in ``go test -v`` output.
        namespace: Namespace whose types the rule selects.
        negate: Use ``ShouldNot()`` instead of ``Should()``.
        predicate: goarchtest condition method.
        argument: Argument passed to the predicate.
        message: Assertion message printed on failure.
    """

    name: str
    namespace: str
    negate: bool
    predicate: Predicate
    argument: str
    message: str

    @classmethod
    def forbid_dependency(cls, namespace: str, target: str, *, name: str) -> ArchRule:
        """Types in *namespace* must not import anything under *target*."""
        return cls(
            name=name,
            namespace=namespace,
            negate=True,
            predicate="HaveDependencyOn",
            argument=target,
            message=f"{namespace} must not depend on {target}",
        )

    @classmethod
    def require_suffix(cls, namespace: str, suffix: str, *, name: str) -> ArchRule:
        """Every type in *namespace* must have a name ending in *suffix*."""
        return cls(
            name=name,
            namespace=namespace,
            negate=False,
            predicate="HaveNameEndingWith",
            argument=suffix,
            message=f"types in {namespace} must have names ending with {suffix}",
        )

    def render(self, depth: int = 1) -> list[str]:
        """Render as a ``t.Run`` subtest indented *depth* levels."""
        pad = _INDENT * depth
        inner = _INDENT * (depth + 1)
        chain = _INDENT * (depth + 2)
        direction = "ShouldNot()" if self.negate else "Should()"
        return [
            f"{pad}t.Run({go_quote(self.name)}, func(t *testing.T) {{",
            f"{inner}result := goarchtest.InPath(projectPath).",
            f"{chain}That().",
            f"{chain}ResideInNamespace({go_quote(self.namespace)}).",
            f"{chain}{direction}.",
            f"{chain}{self.predicate}({go_quote(self.argument)}).",
            f"{chain}GetResult()",
            f"{inner}assert.True(t, result.IsSuccessful, {go_quote(self.message)})",
            f"{pad}}})",
        ]


@dataclass
class GoTestFileBuilder:
    """Accumulates imports and test functions for one ``_test.go`` file.

    Usage::

        builder = GoTestFileBuilder("archtest")
        builder.add_imports(archtest_module, assert_module)
        builder.add_test("TestLayerDependencies", rules)
        source = builder.render()
    """

    package: str
    _imports: list[str] = field(
        default_factory=lambda: ["os", "path/filepath", "testing"], init=False
    )
    _tests: list[tuple[str, tuple[ArchRule, ...]]] = field(default_factory=list, init=False)

    def __post_init__(self) -> None:
        _check_ident(self.package)

    def add_imports(self, *paths: str) -> GoTestFileBuilder:
        for path in paths:
            if path not in self._imports:
                self._imports.append(path)
        return self

    def add_test(self, func_name: str, rules: Sequence[ArchRule]) -> GoTestFileBuilder:
        """Add ``func <func_name>(t *testing.T)`` running each rule as a subtest."""
        if not func_name.startswith("Test"):
            msg = f"Go test functions must start with 'Test': {func_name!r}"
            raise ValueError(msg)
        _check_ident(func_name)
        if not rules:
            msg = f"{func_name} needs at least one rule"
            raise ValueError(msg)
        self._tests.append((func_name, tuple(rules)))
        return self

    @property
    def empty(self) -> bool:
        return not self._tests

    def render(self) -> str:
        """Return the complete Go source, or ``""`` when no tests were added."""
        if self.empty:
            return ""
        lines = [
            "// Code generated by archctl. DO NOT EDIT.",
            "",
            f"package {self.package}",
            "",
            "import (",
        ]
        lines.extend(f"{_INDENT}{go_quote(path)}" for path in self._imports)
        lines.append(")")
        for func_name, rules in self._tests:
            lines.extend(
                [
                    "",
                    f"func {func_name}(t *testing.T) {{",
                    f"{_INDENT}projectPath := os.Getenv({go_quote(PROJECT_PATH_ENV)})",
                    f'{_INDENT}if projectPath == "" {{',
                    f'{_INDENT}{_INDENT}projectPath, _ = filepath.Abs(".")',
                    f"{_INDENT}}}",
                ]
            )
            for rule in rules:
                lines.extend(rule.render(depth=1))
            lines.append("}")
        return "\n".join(lines) + "\n"
