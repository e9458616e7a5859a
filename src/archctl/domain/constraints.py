"""Constraint union — the closed set of rules archctl can verify.

Each variant is a frozen pydantic model tagged by ``kind``. Adding a
variant means adding a case to the encoder and the interpreter; both
match exhaustively and fail type checking otherwise.
"""

from __future__ import annotations

from typing import Annotated, Literal, assert_never

from pydantic import BaseModel, Field

from archctl.domain.types import Layer, NamingPattern


class LayerDependency(BaseModel):
    """``<domain>/<layer>`` must not import any layer outward of it."""

    model_config = {"frozen": True}

    kind: Literal["layer_dependency"] = "layer_dependency"
    layer: Layer
    domain: str


class DomainIsolation(BaseModel):
    """Bounded context *source_domain* must not import *target_domain*."""

    model_config = {"frozen": True}

    kind: Literal["domain_isolation"] = "domain_isolation"
    source_domain: str
    target_domain: str


class NamingConvention(BaseModel):
    """Types under the pattern's namespace must carry its suffix."""

    model_config = {"frozen": True}

    kind: Literal["naming_convention"] = "naming_convention"
    pattern: NamingPattern


Constraint = Annotated[
    LayerDependency | DomainIsolation | NamingConvention,
    Field(discriminator="kind"),
]


def describe(constraint: Constraint) -> str:
    """Short human label, used in logs."""
    match constraint:
        case LayerDependency(layer=layer, domain=domain):
            return f"layer {layer} in {domain}"
        case DomainIsolation(source_domain=src, target_domain=tgt):
            return f"isolation {src} -> {tgt}"
        case NamingConvention(pattern=pattern):
            return f"naming {pattern}"
        case _:
            assert_never(constraint)
