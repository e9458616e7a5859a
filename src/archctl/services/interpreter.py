"""ResultInterpreter — raw execution outcome → ToolResult verdict.

A nonzero exit is a *violation*, not a tool error: the content carries a
category label followed by the toolchain output verbatim so the caller
sees the real assertion failure. Tool errors (timeouts, launch
failures) never reach the interpreter; they are raised by the harness.
"""

from __future__ import annotations

from typing import Any, assert_never

from archctl.domain.constraints import (
    Constraint,
    DomainIsolation,
    LayerDependency,
    NamingConvention,
)
from archctl.infrastructure.harness import ExecutionResult
from archctl.services.result import ToolResult

PASS_MARK = "✅"
FAIL_MARK = "❌"


def _verdict_data(result: ExecutionResult, **extra: Any) -> dict[str, Any]:
    return {
        "passed": result.passed,
        "exit_code": result.exit_code,
        "duration_ms": result.duration_ms,
        "skipped": result.skipped,
        **extra,
    }


class ResultInterpreter:
    """Phrase pass/fail verdicts for each constraint kind."""

    def interpret(self, result: ExecutionResult, constraint: Constraint) -> ToolResult:
        match constraint:
            case LayerDependency(layer=layer, domain=domain):
                op = "check_layer_dependencies"
                passed = f"{PASS_MARK} {layer} layer in {domain} has no illegal dependencies"
                failed = f"{FAIL_MARK} {layer} layer violations found:"
                extra: dict[str, Any] = {"layer": str(layer), "domain": domain}
            case DomainIsolation(source_domain=source, target_domain=target):
                op = "check_domain_isolation"
                passed = f"{PASS_MARK} {source} domain is properly isolated from {target}"
                failed = f"{FAIL_MARK} Domain isolation violation:"
                extra = {"source_domain": source, "target_domain": target}
            case NamingConvention(pattern=pattern):
                op = "check_naming_conventions"
                passed = f"{PASS_MARK} {pattern} naming conventions followed"
                failed = f"{FAIL_MARK} Naming convention violations:"
                extra = {"pattern": str(pattern)}
            case _:
                assert_never(constraint)

        content = passed if result.passed else f"{failed}\n{result.output}"
        return ToolResult(content=content, op=op, data=_verdict_data(result, **extra))

    def interpret_suite(self, result: ExecutionResult) -> ToolResult:
        """Verdict for the project's own architecture suite; output always included."""
        if result.passed:
            content = f"{PASS_MARK} All architecture tests passed\n\n{result.output}"
        else:
            content = f"{FAIL_MARK} Architecture tests failed:\n\n{result.output}"
        return ToolResult(
            content=content,
            op="run_all_architecture_tests",
            data=_verdict_data(result),
        )
