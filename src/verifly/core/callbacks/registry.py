"""
Registro de grupos de callbacks indexado por identidade.

O `CallbackRegistry` guarda vários `CallbackGroup`s (um por identidade,
ex.: ``"verify"``, ``"save"``) e permite combinar registros construídos
de forma independente: grupos de mesma identidade são mesclados via
`CallbackGroup.merge`, os demais são adotados.

Invariantes:
    - Existe no máximo um grupo por identidade
    - A ordem de registro das identidades é preservada
    - `merge` nunca altera os registros de origem

Limites explícitos:
    - Não resolve nem executa callbacks por conta própria
    - Não remove grupos ou callbacks
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Hashable, List, Optional

from verifly.core.config.settings import EngineSettings

from .group import CallbackGroup
from .types import Callback


@dataclass
class CallbackRegistry:
    """Registro canônico de grupos de callbacks, um por identidade."""

    settings: EngineSettings = field(default_factory=EngineSettings)
    _groups: Dict[Hashable, CallbackGroup] = field(default_factory=dict, init=False, repr=False)

    def group(self, identity: Hashable) -> CallbackGroup:
        if identity not in self._groups:
            self._groups[identity] = CallbackGroup(
                identity,
                cache_resolution=self.settings.cache_resolution,
            )
        return self._groups[identity]

    def has_group(self, identity: Hashable) -> bool:
        return identity in self._groups

    def identities(self) -> List[Hashable]:
        return list(self._groups)

    def add(self, identity: Hashable, *args: Any, **kwargs: Any) -> Callback:
        """Atalho para ``registry.group(identity).add_callback(...)``."""
        return self.group(identity).add_callback(*args, **kwargs)

    def merge(self, other: "CallbackRegistry") -> "CallbackRegistry":
        result = CallbackRegistry(settings=self.settings)
        for identity, own_group in self._groups.items():
            result._groups[identity] = _copy(own_group)
        for identity, other_group in other._groups.items():
            if identity in result._groups:
                result._groups[identity] = result._groups[identity].merge(other_group)
            else:
                result._groups[identity] = _copy(other_group)
        return result

    def invoke(self, identity: Hashable, context: Any, action: Optional[Callable[[], Any]] = None) -> Any:
        """Invoca o grupo `identity`; sem grupo registrado, executa `action` diretamente."""
        if identity not in self._groups:
            return action() if action is not None else None
        return self._groups[identity].invoke(context, action)


def _copy(group: CallbackGroup) -> CallbackGroup:
    return CallbackGroup(
        group.identity,
        group.callbacks,
        merged=group.merged,
        cache_resolution=group.cache_resolution,
    )
