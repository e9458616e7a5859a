"""ArchitectureService — encode, execute, interpret.

One method per tool. Each builds a constraint, hands the generated
source to the workspace harness, and phrases the outcome. Failures are
raised as :class:`ArchctlError` subclasses for the dispatcher to report.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ValidationError

from archctl.domain.constraints import (
    Constraint,
    DomainIsolation,
    LayerDependency,
    NamingConvention,
    describe,
)
from archctl.domain.errors import EncodingError
from archctl.services.base import BaseService
from archctl.services.encoder import ConstraintEncoder
from archctl.services.interpreter import ResultInterpreter

if TYPE_CHECKING:
    from archctl.infrastructure.workspace import Workspace
    from archctl.services.result import ToolResult

logger = logging.getLogger(__name__)


def _build[T: BaseModel](model_cls: type[T], **params: Any) -> T:
    """Construct a constraint, surfacing bad parameters as EncodingError."""
    try:
        return model_cls(**params)
    except ValidationError as exc:
        first = exc.errors()[0]
        field = ".".join(str(p) for p in first["loc"])
        msg = f"cannot encode {model_cls.__name__}: {field}: {first['msg']}"
        raise EncodingError(msg, detail={"params": params}) from exc


class ArchitectureService(BaseService):
    """Runs architecture constraints against the workspace's project."""

    def __init__(
        self,
        workspace: Workspace,
        *,
        encoder: ConstraintEncoder | None = None,
        interpreter: ResultInterpreter | None = None,
    ) -> None:
        super().__init__(workspace)
        self._encoder = encoder or ConstraintEncoder(workspace.settings.encoder)
        self._interpreter = interpreter or ResultInterpreter()

    def check(self, constraint: Constraint) -> ToolResult:
        """Verify one constraint end to end."""
        source = self._encoder.encode(constraint)
        logger.debug("Checking %s (%d bytes of test source)", describe(constraint), len(source))
        result = self._workspace.harness.run(source)
        return self._interpreter.interpret(result, constraint)

    def check_layer_dependencies(self, layer: str, domain: str) -> ToolResult:
        return self.check(_build(LayerDependency, layer=layer, domain=domain))

    def check_domain_isolation(self, source_domain: str, target_domain: str) -> ToolResult:
        return self.check(
            _build(DomainIsolation, source_domain=source_domain, target_domain=target_domain)
        )

    def check_naming_conventions(self, pattern: str) -> ToolResult:
        return self.check(_build(NamingConvention, pattern=pattern))

    def run_all(self) -> ToolResult:
        """Run the project's checked-in architecture suite."""
        return self._interpreter.interpret_suite(self._workspace.harness.run_all())
