"""
CallbackGroup — composição de callbacks ordenados por dependência.

Um `CallbackGroup` possui uma coleção ordenada de `Callback`s que
compartilham uma única identidade, resolve essa coleção em uma ordem de
execução sob demanda e expõe:

    - `invoke` → executa uma ação envolvida pelos callbacks resolvidos
    - `merge`  → combina com outro grupo de mesma identidade

Fluxo de controle:
    1. o chamador cria o grupo e adiciona callbacks (`add_callback`)
    2. opcionalmente combina grupos de outras fontes (`merge`)
    3. chama `invoke(context, action)`; a resolução (grafo + ordenação
       topológica) ocorre nesse momento e a sequência é executada

Decisões arquiteturais:
    - `merge` é concatenação pura seguida de nova resolução; nunca há
      remendo incremental do grafo
    - Callbacks `around` são compostos da direita para a esquerda em uma
      única closure (sem recursão sobre a lista de `around`)
    - Exceções de callbacks ou da ação propagam inalteradas

Limites explícitos:
    - Não avalia condições (`if`/`unless`); isso cabe ao dispatcher
    - Não remove callbacks após o registro
    - Não agenda execução concorrente
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Hashable, Iterable, Iterator, List, Optional, Tuple, Union

from verifly.core.exceptions import DuplicateCallbackNameError, IdentityMismatchError
from verifly.core.log import HasLogger

from .resolver import resolve_order
from .types import Callback, Names, Position


class CallbackGroup(HasLogger):
    """
    Grupo de callbacks que compartilham uma identidade.

    Atributos:
        - identity: rótulo opaco; apenas grupos de mesma identidade se combinam
        - callbacks: membros em ordem de inserção (tupla, somente leitura)
        - merged: indica se o grupo foi produzido por `merge`
        - cache_resolution: reaproveita a última ordem resolvida até a
          próxima alteração de membros

    Invariantes:
        - A ordem de inserção é preservada e serve de desempate na resolução
        - Antes de qualquer merge, nomes são únicos no grupo
        - `invoke` e `merge` nunca alteram os membros
    """

    def __init__(
        self,
        identity: Hashable,
        callbacks: Iterable[Callback] = (),
        *,
        merged: bool = False,
        cache_resolution: bool = False,
    ) -> None:
        self.identity = identity
        self.merged = merged
        self.cache_resolution = cache_resolution
        self._callbacks: List[Callback] = []
        self._resolved: Optional[List[Callback]] = None
        for cb in callbacks:
            self.add_callback(cb)

    def __repr__(self) -> str:
        return f"CallbackGroup({self.identity!r}, names={self.names()!r})"

    def __len__(self) -> int:
        return len(self._callbacks)

    def __iter__(self) -> Iterator[Callback]:
        return iter(self._callbacks)

    @property
    def callbacks(self) -> Tuple[Callback, ...]:
        return tuple(self._callbacks)

    def names(self) -> List[str]:
        return [cb.name for cb in self._callbacks]

    # -----------------------------
    # Registro
    # -----------------------------
    def add_callback(
        self,
        callback: Union[Callback, Position, str],
        action: Optional[Callable[..., Any]] = None,
        name: Optional[str] = None,
        *,
        requires: Names = (),
        insert_before: Names = (),
    ) -> Callback:
        """
        Registra um callback no grupo.

        Aceita um `Callback` pronto ou os campos para construí-lo:
        ``add_callback("before", fn, "audit", requires="load")``.

        Raises:
            DuplicateCallbackNameError: se o nome já existir no grupo e o
                grupo não tiver sido produzido por `merge`.
            InvalidCallbackError: se os campos do callback forem inválidos.
        """
        if not isinstance(callback, Callback):
            callback = Callback(
                position=callback,
                action=action,
                name=name,
                requires=requires,
                insert_before=insert_before,
            )

        if not self.merged and any(cb.name == callback.name for cb in self._callbacks):
            raise DuplicateCallbackNameError(
                f"Duplicate callback name: {callback.name}",
                details={"identity": self.identity, "name": callback.name},
            )

        self._callbacks.append(callback)
        self._resolved = None
        return callback

    def _decorator(self, position: Position, name: Optional[str], requires: Names, insert_before: Names):
        def register(fn: Callable[..., Any]) -> Callable[..., Any]:
            self.add_callback(
                position,
                fn,
                name or fn.__name__,
                requires=requires,
                insert_before=insert_before,
            )
            return fn

        return register

    def before(self, name: Optional[str] = None, *, requires: Names = (), insert_before: Names = ()):
        """Decorator: registra a função como callback `before`."""
        return self._decorator(Position.BEFORE, name, requires, insert_before)

    def after(self, name: Optional[str] = None, *, requires: Names = (), insert_before: Names = ()):
        """Decorator: registra a função como callback `after`."""
        return self._decorator(Position.AFTER, name, requires, insert_before)

    def around(self, name: Optional[str] = None, *, requires: Names = (), insert_before: Names = ()):
        """Decorator: registra a função como callback `around` (recebe `proceed`)."""
        return self._decorator(Position.AROUND, name, requires, insert_before)

    # -----------------------------
    # Resolução
    # -----------------------------
    def resolve(self) -> List[Callback]:
        if self.cache_resolution and self._resolved is not None:
            return list(self._resolved)
        resolved = resolve_order(self._callbacks, identity=self.identity)
        if self.cache_resolution:
            self._resolved = resolved
        return list(resolved)

    # -----------------------------
    # Merge
    # -----------------------------
    def merge(self, other: "CallbackGroup") -> "CallbackGroup":
        """
        Combina este grupo com `other`, retornando um NOVO grupo.

        Os membros de `self` vêm primeiro, seguidos pelos de `other`, cada
        lado em sua ordem de inserção. Homônimos não são deduplicados;
        restrições entre os dois lados passam a valer na próxima resolução.

        Raises:
            IdentityMismatchError: se as identidades forem diferentes.
                Nenhum dos grupos é alterado.
        """
        if self.identity != other.identity:
            raise IdentityMismatchError(
                "Only groups with one name could be merged",
                details={"identity": self.identity, "other_identity": other.identity},
            )

        merged = CallbackGroup(
            self.identity,
            merged=True,
            cache_resolution=self.cache_resolution,
        )
        merged._callbacks = list(self._callbacks) + list(other._callbacks)
        merged.logger = self.logger
        self.logger.debug(
            "merged %r: %d + %d callbacks",
            self.identity,
            len(self._callbacks),
            len(other._callbacks),
        )
        return merged

    # -----------------------------
    # Invocação
    # -----------------------------
    def invoke(self, context: Any, action: Optional[Callable[[], Any]] = None) -> Any:
        """
        Executa `action` envolvida pelos callbacks resolvidos.

        Linha do tempo:
            around₁ → around₂ → … → before* → action → after* → … → around₁

        O primeiro `around` resolvido é o mais externo. Cada callback
        recebe `context` como primeiro argumento; `around` recebe também
        `proceed`, que executa a camada seguinte.

        Returns:
            O retorno de `action` (None se algum `around` não prosseguir).

        Raises:
            CyclicConstraintError: se as restrições formarem um ciclo.
            Qualquer exceção dos callbacks ou de `action`, inalterada.
        """
        buckets: Dict[Position, List[Callback]] = {p: [] for p in Position}
        for cb in self.resolve():
            buckets[cb.position].append(cb)

        outcome: List[Any] = [None]

        def core() -> Any:
            for cb in buckets[Position.BEFORE]:
                cb.action(context)
            outcome[0] = action() if action is not None else None
            for cb in buckets[Position.AFTER]:
                cb.action(context)
            return outcome[0]

        pipeline = core
        for cb in reversed(buckets[Position.AROUND]):
            pipeline = _wrap(cb, context, pipeline)

        pipeline()
        return outcome[0]


def _wrap(callback: Callback, context: Any, proceed: Callable[[], Any]) -> Callable[[], Any]:
    def layer() -> Any:
        return callback.action(context, proceed)

    return layer


def new_group(identity: Hashable, *, cache_resolution: bool = False) -> CallbackGroup:
    return CallbackGroup(identity, cache_resolution=cache_resolution)
