"""
# Callbacks — motor de composição ordenada por dependência

Este pacote registra unidades de callback nomeadas (before, after,
around), resolve restrições de ordem entre elas (`requires`,
`insert_before`) em uma ordem determinística e executa uma ação envolvida
por essa sequência.

## Componentes

- **types**
  - `Position`: papel temporal do callback
  - `Callback`: unidade imutável com restrições por nome

- **resolver**
  - `resolve_order`: ordenação topológica estável (Kahn + ordem de inserção)

- **group**
  - `CallbackGroup`: registro, `merge` e `invoke`

- **registry**
  - `CallbackRegistry`: grupos indexados por identidade

## Invariantes

- Restrições referenciam nomes; nomes ausentes não geram restrição
- Empates são resolvidos pela ordem de inserção
- Ciclos falham com `CyclicConstraintError`, listando os nomes envolvidos
"""

from .group import CallbackGroup, new_group
from .registry import CallbackRegistry
from .resolver import resolve_order
from .types import Callback, Position

__all__ = [
    "Callback",
    "CallbackGroup",
    "CallbackRegistry",
    "Position",
    "new_group",
    "resolve_order",
]
