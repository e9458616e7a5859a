"""Fixed policy tables for layer direction and naming conventions.

INVARIANT: a layer may only depend on layers listed before it in
:class:`~archctl.domain.types.Layer`. The forbidden set of a layer is
every layer after it.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from archctl.domain.types import Layer, NamingPattern

FORBIDDEN_LAYERS: dict[Layer, tuple[Layer, ...]] = {
    Layer.DOMAIN: (Layer.APPLICATION, Layer.INFRASTRUCTURE),
    Layer.APPLICATION: (Layer.INFRASTRUCTURE,),
    Layer.INFRASTRUCTURE: (),
}


@dataclass(frozen=True)
class NamingRule:
    """Where a convention applies and the suffix it demands.

    ``namespace`` is relative to the namespace root (``internal`` by default)
    and may contain ``*`` to match any domain.
    """

    namespace: str
    suffix: str


NAMING_RULES: dict[NamingPattern, NamingRule] = {
    NamingPattern.REPOSITORY: NamingRule("*/domain", "Repository"),
    NamingPattern.USECASE: NamingRule("*/application/usecase", "UseCase"),
    NamingPattern.HANDLER: NamingRule("*/infrastructure/http", "Handler"),
}


def forbidden_layers(layer: Layer) -> tuple[Layer, ...]:
    """Layers that *layer* must never import."""
    return FORBIDDEN_LAYERS[layer]


def is_forbidden(source: Layer, target: Layer) -> bool:
    """True when a *source* package importing *target* breaks the layer policy."""
    return target in FORBIDDEN_LAYERS[source]


_DOMAIN_NAME_RE = re.compile(r"^[A-Za-z0-9_][A-Za-z0-9_.-]*$")


def is_valid_domain_name(name: str) -> bool:
    """A bounded-context name is a single path segment (no ``/``, not ``..``).

    Examples:
        >>> is_valid_domain_name("user")
        True
        >>> is_valid_domain_name("../etc")
        False
    """
    return bool(_DOMAIN_NAME_RE.match(name)) and ".." not in name
