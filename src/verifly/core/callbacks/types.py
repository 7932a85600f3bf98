"""
Tipos canônicos do motor de callbacks do Verifly.

Este módulo define as estruturas fundamentais compartilhadas entre o
resolver, o `CallbackGroup` e o dispatcher de verificação.

Componentes principais:
    - Position → enum de papéis temporais (BEFORE, AFTER, AROUND)
    - Callback → unidade imutável de comportamento com restrições de ordem

Princípios fundamentais:
    - Callbacks são valores imutáveis
    - Restrições referenciam NOMES, nunca objetos
    - Nenhuma lógica de resolução ou execução vive neste módulo

Invariantes:
    - A posição de um Callback é fixada na criação e nunca muda
    - `requires` e `insert_before` são sempre tuplas de strings
    - Referências para nomes ainda não registrados são permitidas

Limites explícitos:
    - Não resolve ordem de execução
    - Não executa callbacks
    - Não valida unicidade de nomes (responsabilidade do grupo)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Iterable, Tuple, Union

from verifly.core.exceptions import InvalidCallbackError


class Position(str, Enum):
    """
    Papel temporal de um callback em relação à ação envolvida.

    Valores:
        - BEFORE: executa antes da ação, sem argumentos além do contexto
        - AFTER: executa depois da ação, sem argumentos além do contexto
        - AROUND: envolve o restante do pipeline; recebe `proceed`

    Os valores são strings para facilitar declaração via configuração
    e inspeção em logs.
    """
    BEFORE = "before"
    AFTER = "after"
    AROUND = "around"


Names = Union[str, Iterable[str], None]


def _freeze_names(value: Names, *, field_name: str) -> Tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        value = (value,)
    try:
        names = tuple(value)
    except TypeError as e:
        raise InvalidCallbackError(
            f"{field_name} must be a name or an iterable of names",
            details={"field": field_name, "value": repr(value)},
        ) from e
    for n in names:
        if not isinstance(n, str) or not n:
            raise InvalidCallbackError(
                f"{field_name} must contain non-empty strings",
                details={"field": field_name, "value": n},
            )
    return names


@dataclass(frozen=True)
class Callback:
    """
    Unidade imutável de comportamento com papel temporal e restrições de ordem.

    Campos:
        - position: papel temporal (`Position`)
        - action: corpo do callback
            * BEFORE/AFTER → ``action(context)``
            * AROUND       → ``action(context, proceed)``; deve chamar
              ``proceed()`` zero ou uma vez (não é verificado)
        - name: identificador, único dentro de um grupo (não globalmente)
        - requires: nomes que devem aparecer antes deste callback
        - insert_before: nomes que este callback deve preceder

    Decisões arquiteturais:
        - `requires`/`insert_before` aceitam string única ou iterável
          e são normalizados para tuplas
        - Nomes ausentes do grupo são aceitos (referências futuras)

    Invariantes:
        - Uma instância nunca é alterada após criada
        - `name` é sempre uma string não vazia
        - `action` é sempre chamável
    """
    position: Position
    action: Callable[..., Any]
    name: str
    requires: Tuple[str, ...] = field(default=())
    insert_before: Tuple[str, ...] = field(default=())

    def __post_init__(self) -> None:
        try:
            position = Position(self.position)
        except ValueError as e:
            raise InvalidCallbackError(
                f"Unknown callback position: {self.position!r}",
                details={"position": self.position, "name": self.name},
                hint="Use 'before', 'after' ou 'around'",
            ) from e

        if not isinstance(self.name, str) or not self.name.strip():
            raise InvalidCallbackError(
                "callback.name must be a non-empty string",
                details={"name": self.name},
            )
        if not callable(self.action):
            raise InvalidCallbackError(
                f"callback.action must be callable: {self.name}",
                details={"name": self.name, "action": repr(self.action)},
            )

        # frozen: normalização via object.__setattr__
        object.__setattr__(self, "position", position)
        object.__setattr__(self, "requires", _freeze_names(self.requires, field_name="requires"))
        object.__setattr__(
            self,
            "insert_before",
            _freeze_names(self.insert_before, field_name="insert_before"),
        )
