"""ConstraintEncoder — constraint → Go test source.

Each constraint kind maps to one generated ``go test`` function whose
subtests are goarchtest rules. The mapping is exhaustive over the
constraint union; source text is assembled by
:class:`~archctl.infrastructure.codegen.GoTestFileBuilder`.

An empty return value means "nothing to verify" and only happens for
the outermost layer, which has no forbidden dependencies. Domain names
that are not a single path segment, and isolation of a domain from
itself, raise :class:`EncodingError`.
"""

from __future__ import annotations

from typing import assert_never

from archctl.config.models import EncoderConfig
from archctl.domain.constraints import (
    Constraint,
    DomainIsolation,
    LayerDependency,
    NamingConvention,
)
from archctl.domain.errors import EncodingError
from archctl.domain.policy import NAMING_RULES, forbidden_layers, is_valid_domain_name
from archctl.infrastructure.codegen import ArchRule, GoTestFileBuilder


class ConstraintEncoder:
    """Translate constraints into goarchtest source for the target project."""

    def __init__(self, config: EncoderConfig | None = None) -> None:
        self._config = config or EncoderConfig()

    def encode(self, constraint: Constraint) -> str:
        """Return Go test source asserting *constraint*, or ``""`` if vacuous."""
        match constraint:
            case LayerDependency():
                test_name, rules = "TestLayerDependencies", self._layer_rules(constraint)
            case DomainIsolation():
                test_name, rules = "TestDomainIsolation", self._isolation_rules(constraint)
            case NamingConvention():
                test_name, rules = "TestNaming", self._naming_rules(constraint)
            case _:
                assert_never(constraint)

        if not rules:
            return ""
        builder = GoTestFileBuilder(self._config.package_name)
        builder.add_imports(self._config.archtest_module, self._config.assert_module)
        builder.add_test(test_name, rules)
        return builder.render()

    # ------------------------------------------------------------------
    # Per-kind rule construction
    # ------------------------------------------------------------------

    def _layer_rules(self, constraint: LayerDependency) -> list[ArchRule]:
        domain = self._domain(constraint.domain, "domain")
        layer = constraint.layer
        source = self._namespace(domain, layer)
        return [
            ArchRule.forbid_dependency(
                source,
                self._namespace(domain, forbidden),
                name=f"{layer}_must_not_depend_on_{forbidden}",
            )
            for forbidden in forbidden_layers(layer)
        ]

    def _isolation_rules(self, constraint: DomainIsolation) -> list[ArchRule]:
        source = self._domain(constraint.source_domain, "sourceDomain")
        target = self._domain(constraint.target_domain, "targetDomain")
        if source == target:
            msg = "sourceDomain and targetDomain must be different domains"
            raise EncodingError(msg, detail={"domain": source})
        return [
            ArchRule.forbid_dependency(
                self._namespace(source) + "/",
                self._namespace(target) + "/",
                name=f"{source}_must_not_depend_on_{target}",
            )
        ]

    def _naming_rules(self, constraint: NamingConvention) -> list[ArchRule]:
        rule = NAMING_RULES[constraint.pattern]
        return [
            ArchRule.require_suffix(
                self._namespace(rule.namespace),
                rule.suffix,
                name=f"{constraint.pattern}_suffix",
            )
        ]

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _namespace(self, *parts: str) -> str:
        return "/".join([self._config.namespace_root, *parts])

    @staticmethod
    def _domain(name: str, param: str) -> str:
        if not is_valid_domain_name(name):
            msg = f"{param} is not a valid domain name: {name!r}"
            raise EncodingError(msg, detail={param: name})
        return name
