# tests/conftest.py
"""
Fixtures compartilhados para testes do Verifly.

Este módulo define fixtures reutilizáveis que fornecem:
- um contexto de invocação que registra "flags" na ordem de execução
- uma fábrica de callbacks que grava `before_<nome>` / `after_<nome>`
- um `CallbackGroup` vazio de identidade `"action"`

Decisões arquiteturais:
    - Callbacks `around` registram `before_<nome>` antes de `proceed()`
      e `after_<nome>` depois, tornando a linha do tempo observável
    - Imports do core são realizados de forma lazy para
      melhorar a clareza de erros durante falhas

Invariantes:
    - Nenhuma fixture realiza I/O
    - Nenhuma fixture invoca grupos por conta própria
"""

import pytest


class FlagRecorder:
    """Contexto de invocação mínimo: acumula flags em ordem."""

    def __init__(self):
        self.flags = []

    def index(self, flag):
        if flag not in self.flags:
            raise AssertionError(f"{flag} not found in {self.flags}")
        return self.flags.index(flag)

    def assert_sequence(self, *sequence):
        positions = [self.index(flag) for flag in sequence]
        assert positions == sorted(positions), f"{' < '.join(sequence)} violated: {self.flags}"


@pytest.fixture
def recorder():
    return FlagRecorder()


@pytest.fixture
def group():
    from verifly.core.callbacks.group import CallbackGroup

    return CallbackGroup("action")


@pytest.fixture
def add_callback(group):
    """
    Fixture factory que registra callbacks de teste em um grupo.

    Uso: ``add_callback("foo", "around", requires="bar", target=outro_grupo)``.
    Os callbacks gravam flags no `FlagRecorder` recebido como contexto.

    Returns:
        Callable: função que registra e retorna o `Callback` criado.
    """

    def _add(name, position="before", *, target=None, **constraints):
        if position == "around":
            def action(ctx, proceed):
                ctx.flags.append(f"before_{name}")
                proceed()
                ctx.flags.append(f"after_{name}")
        else:
            def action(ctx):
                ctx.flags.append(f"{position}_{name}")

        owner = group if target is None else target
        return owner.add_callback(position, action, name, **constraints)

    return _add


@pytest.fixture
def action(recorder):
    def _action():
        recorder.flags.append("action")
        return "result"

    return _action


@pytest.fixture
def engine_defaults_yaml() -> str:
    """YAML típico de `verifly.defaults.yaml`."""
    return (
        "engine:\n"
        "  cache_resolution: false\n"
        "  log_level: WARNING\n"
    )
