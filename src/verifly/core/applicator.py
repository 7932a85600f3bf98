"""
Applicator — adapta valores heterogêneos em chamáveis uniformes.

Um "aplicável" pode ser:
    - literal booleano ou None        → `ConstantApplicator`
    - qualquer chamável               → `CallableApplicator`
    - string com nome de método       → `MethodApplicator`

A variante é escolhida UMA vez, em `Applicator.build`; na invocação não
há reinterpretação do valor. Strings nunca são avaliadas como código:
representam apenas nomes de métodos do `binding`.

Assinaturas aceitas por chamáveis (aridade posicional inspecionada no build):
    - ``fn()``
    - ``fn(context)``
    - ``fn(binding, context)``
"""

from __future__ import annotations

import inspect
from typing import Any, Callable


def _positional_arity(fn: Callable[..., Any]) -> int:
    """Número de parâmetros posicionais aceitos (``-1`` para ``*args``)."""
    try:
        signature = inspect.signature(fn)
    except (TypeError, ValueError):
        # builtins sem assinatura: assume contexto
        return 1

    count = 0
    for param in signature.parameters.values():
        if param.kind is inspect.Parameter.VAR_POSITIONAL:
            return -1
        if param.kind in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
        ):
            count += 1
    return count


class Applicator:
    """Base das variantes; use `Applicator.build` para construir."""

    def __init__(self, applicable: Any) -> None:
        self.applicable = applicable

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.applicable!r})"

    @classmethod
    def build(cls, applicable: Any) -> "Applicator":
        if isinstance(applicable, Applicator):
            return applicable
        if applicable is None or isinstance(applicable, bool):
            return ConstantApplicator(applicable)
        if isinstance(applicable, str):
            return MethodApplicator(applicable)
        if callable(applicable):
            return CallableApplicator(applicable)
        raise TypeError(f"Don't know how to apply {applicable!r}")

    @classmethod
    def call(cls, applicable: Any, binding: Any, context: Any) -> Any:
        return cls.build(applicable).apply(binding, context)

    def apply(self, binding: Any, context: Any) -> Any:
        raise NotImplementedError


class ConstantApplicator(Applicator):
    def apply(self, binding: Any, context: Any) -> Any:
        return self.applicable


class CallableApplicator(Applicator):
    def __init__(self, applicable: Callable[..., Any]) -> None:
        super().__init__(applicable)
        self.arity = _positional_arity(applicable)

    def apply(self, binding: Any, context: Any) -> Any:
        if self.arity == 0:
            return self.applicable()
        if self.arity == 1:
            return self.applicable(context)
        return self.applicable(binding, context)


class MethodApplicator(Applicator):
    """Resolve `applicable` como nome de método do `binding` a cada chamada."""

    def __init__(self, applicable: str) -> None:
        if not applicable.isidentifier():
            raise ValueError(f"Not a method name: {applicable!r}")
        super().__init__(applicable)

    def apply(self, binding: Any, context: Any) -> Any:
        method = getattr(binding, self.applicable)
        if _positional_arity(method) == 0:
            return method()
        return method(context)
