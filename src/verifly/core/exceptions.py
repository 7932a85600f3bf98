"""
Verifly — Canonical Exceptions (v1)

Este módulo define as exceções tipadas do motor de callbacks do Verifly.

Objetivo:
- Permitir que grupos e resolver levantem exceções semânticas tipadas
- Carregar dados estruturados (`details`) úteis para diagnóstico
- Evitar ValueError/RuntimeError genéricos em guardrails críticos

Regras:
- Todas as exceções aqui são erros de programação (fatais, sem retry).
- Exceções levantadas por corpos de callbacks ou pela ação envolvida
  NUNCA são encapsuladas por estas classes; propagam inalteradas.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence


class VeriflyError(Exception):
    """Base class para exceções internas do Verifly.

    Importante:
    - Sempre carregar dados estruturados em `details`
    - Mensagem deve ser curta e humana
    """

    def __init__(
        self,
        message: str,
        *,
        details: Optional[Dict[str, Any]] = None,
        hint: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details: Dict[str, Any] = dict(details or {})
        self.hint = hint

    def __str__(self) -> str:
        return self.message


# ---------------------------------------------------------------------------
# Callback / CallbackGroup
# ---------------------------------------------------------------------------

class InvalidCallbackError(VeriflyError, ValueError):
    """Callback construído com nome, posição ou ação inválidos."""


class DuplicateCallbackNameError(VeriflyError, ValueError):
    """
    Exceção levantada quando um nome de callback já existe no grupo.

    Decisões arquiteturais:
        - Nomes são únicos por instância de grupo (antes de qualquer merge)
        - A duplicidade é detectada no registro, antes da resolução

    Limites explícitos:
        - Não tenta renomear callbacks automaticamente
        - Não se aplica a grupos produzidos por `merge`
    """


class IdentityMismatchError(VeriflyError, ValueError):
    """
    Exceção levantada ao mesclar grupos com identidades diferentes.

    Invariantes:
        - Nenhum dos grupos envolvidos é alterado quando esta exceção ocorre
    """


class CyclicConstraintError(VeriflyError, ValueError):
    """
    Exceção levantada quando `requires`/`insert_before` formam um ciclo.

    O atributo `cycle` contém os nomes envolvidos, na ordem do ciclo,
    repetindo o primeiro nome ao final (ex.: ``["x", "y", "x"]``).
    """

    def __init__(self, cycle: Sequence[str], *, identity: Any = None) -> None:
        self.cycle: List[str] = list(cycle)
        rendered = " -> ".join(self.cycle)
        super().__init__(
            f"Cyclic callback constraints: {rendered}",
            details={"cycle": self.cycle, "identity": identity},
            hint="Remova um dos `requires`/`insert_before` envolvidos no ciclo",
        )
