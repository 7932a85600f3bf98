"""
Verifier — dispatcher genérico de regras de verificação.

Um `Verifier` é um proto-validador: em vez de erros em texto cru, coleta
mensagens em formato livre (definido por subclasses via `message`).

Declaração de regras:

    class UserVerifier(Verifier):
        @rule(if_="is_active")
        def name_present(self, context):
            if not self.model.get("name"):
                self.message(lambda: "name missing")

        @callback("before")
        def normalize(self):
            ...

    UserVerifier.verify(AddressVerifier)          # verifier descendente
    UserVerifier.verify(lambda v, ctx: ..., unless=lambda ctx: ctx["skip"])

Cada regra aceita `if_`/`unless` no formato de `Applicator` (literal,
chamável ou nome de método). Um verifier descendente (subclasse da classe
em execução) é delegado via ``Descendant.call(model, context)`` e suas
mensagens são concatenadas.

Regras pertencem à classe que as declara: subclasses começam sem regras
(somente os callbacks são herdados, via merge).

A avaliação das regras roda envolvida pelo `CallbackGroup` de identidade
``"verify"`` da classe: o grupo de uma subclasse é o grupo do pai mesclado
ao seu próprio, e os callbacks recebem a instância do verifier como
contexto.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, ClassVar, Dict, List, Optional

from verifly.core.applicator import Applicator
from verifly.core.callbacks.group import CallbackGroup
from verifly.core.callbacks.types import Names, Position
from verifly.core.log import HasLogger

VERIFY = "verify"

_RULE_ATTR = "__verifly_rule__"
_CALLBACK_ATTR = "__verifly_callback__"


@dataclass(frozen=True)
class Rule:
    target: Any
    if_: Applicator
    unless: Applicator


def rule(*, if_: Any = True, unless: Any = False) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Marca um método como regra; registrado na criação da subclasse."""

    def mark(fn: Callable[..., Any]) -> Callable[..., Any]:
        setattr(fn, _RULE_ATTR, {"if_": if_, "unless": unless})
        return fn

    return mark


def callback(
    position: Position | str,
    name: Optional[str] = None,
    *,
    requires: Names = (),
    insert_before: Names = (),
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Marca um método como callback do grupo ``"verify"`` da classe."""

    def mark(fn: Callable[..., Any]) -> Callable[..., Any]:
        setattr(
            fn,
            _CALLBACK_ATTR,
            {
                "position": position,
                "name": name or fn.__name__,
                "requires": requires,
                "insert_before": insert_before,
            },
        )
        return fn

    return mark


class Verifier(HasLogger):
    """
    Classe base de verifiers.

    Atributos:
        - model: objeto genérico sob verificação
        - messages: mensagens produzidas pela última execução

    Subclasses devem sobrescrever `message` chamando `super().message`
    com uma fábrica da mensagem concreta.
    """

    _rules: ClassVar[List[Rule]] = []
    _own_callbacks: ClassVar[CallbackGroup] = CallbackGroup(VERIFY)

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls._rules = []
        cls._own_callbacks = CallbackGroup(VERIFY)

        for attr, value in cls.__dict__.items():
            rule_opts = getattr(value, _RULE_ATTR, None)
            if rule_opts is not None:
                cls.verify(attr, **rule_opts)

            cb_opts = getattr(value, _CALLBACK_ATTR, None)
            if cb_opts is not None:
                cls._own_callbacks.add_callback(
                    cb_opts["position"],
                    value,
                    cb_opts["name"],
                    requires=cb_opts["requires"],
                    insert_before=cb_opts["insert_before"],
                )

    def __init__(self, model: Any) -> None:
        self.model = model
        self.messages: List[Any] = []

    # -----------------------------
    # Declaração
    # -----------------------------
    @classmethod
    def verify(cls, target: Any, *, if_: Any = True, unless: Any = False) -> List[Rule]:
        """
        Declara uma regra da classe.

        Args:
            target: chamável, nome de método ou classe descendente.
            if_: executa a regra somente se o resultado for verdadeiro.
            unless: executa a regra somente se o resultado for falso.

        Returns:
            List[Rule]: todas as regras já declaradas na classe.
        """
        is_descendant = isinstance(target, type) and issubclass(target, Verifier)
        resolved = target if is_descendant else Applicator.build(target)
        cls._rules.append(Rule(resolved, Applicator.build(if_), Applicator.build(unless)))
        return list(cls._rules)

    @classmethod
    def rules(cls) -> List[Rule]:
        return list(cls._rules)

    @classmethod
    def callback_group(cls) -> CallbackGroup:
        """Grupo ``"verify"`` efetivo: grupos da hierarquia mesclados da base para a classe."""
        group: Optional[CallbackGroup] = None
        for klass in reversed(cls.__mro__):
            own = klass.__dict__.get("_own_callbacks")
            if own is None:
                continue
            if group is None:
                group = CallbackGroup(VERIFY, own.callbacks)
            else:
                group = group.merge(own)
        return group

    # -----------------------------
    # Execução
    # -----------------------------
    @classmethod
    def call(cls, model: Any, context: Optional[Dict[str, Any]] = None) -> List[Any]:
        return cls(model).run(context)

    def run(self, context: Optional[Dict[str, Any]] = None) -> List[Any]:
        """Executa todas as regras aplicáveis e retorna as mensagens produzidas."""
        context = {} if context is None else context
        self.messages = []
        self.callback_group().invoke(self, lambda: self._apply_rules(context))
        return self.messages

    def _apply_rules(self, context: Dict[str, Any]) -> None:
        for r in self._rules:
            if not r.if_.apply(self, context):
                continue
            if r.unless.apply(self, context):
                continue

            if isinstance(r.target, type) and r.target is not type(self) and issubclass(r.target, type(self)):
                self.messages.extend(r.target.call(self.model, context))
            elif isinstance(r.target, Applicator):
                r.target.apply(self, context)
            else:
                self.logger.warning(
                    "skipping verifier %s: not a descendant of %s",
                    r.target.__name__,
                    type(self).__name__,
                )

    def message(self, build: Callable[[], Any]) -> Any:
        new_message = build()
        self.messages.append(new_message)
        return new_message
