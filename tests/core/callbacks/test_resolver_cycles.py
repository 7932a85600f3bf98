# tests/core/callbacks/test_resolver_cycles.py
"""
Testes de detecção de ciclos no resolver de callbacks.

Os testes asseguram que:
- ciclos diretos e indiretos falham com `CyclicConstraintError`
- o diagnóstico lista os nomes envolvidos, na ordem do ciclo
- nomes fora do ciclo não aparecem no diagnóstico
- nenhuma ordem parcial é retornada
"""

import pytest

from verifly.core.callbacks.group import CallbackGroup
from verifly.core.callbacks.resolver import resolve_order
from verifly.core.callbacks.types import Callback
from verifly.core.exceptions import CyclicConstraintError


def _cb(name, **constraints):
    return Callback("before", lambda ctx: None, name, **constraints)


def test_two_node_cycle():
    with pytest.raises(CyclicConstraintError) as exc_info:
        resolve_order([_cb("x", requires="y"), _cb("y", requires="x")])

    err = exc_info.value
    assert sorted(set(err.cycle)) == ["x", "y"]
    assert err.cycle[0] == err.cycle[-1]
    assert "x" in str(err) and "y" in str(err)


def test_indirect_cycle_mixing_requires_and_insert_before():
    # c -> b -> a (requires) e a -> c (insert_before)
    callbacks = [
        _cb("ok"),
        _cb("a", requires="b", insert_before="c"),
        _cb("b", requires="c"),
        _cb("c"),
        _cb("tail", requires="a"),
    ]
    with pytest.raises(CyclicConstraintError) as exc_info:
        resolve_order(callbacks)
    assert exc_info.value.cycle == ["c", "b", "a", "c"]


def test_acyclic_mix_resolves():
    callbacks = [
        _cb("ok"),
        _cb("a", requires="b"),
        _cb("b", requires="c"),
        _cb("c", insert_before="b"),
        _cb("e", requires="a"),
    ]
    assert [c.name for c in resolve_order(callbacks)] == ["ok", "c", "b", "a", "e"]


def test_three_node_cycle_reports_only_offenders():
    callbacks = [
        _cb("free"),
        _cb("a", requires="c"),
        _cb("b", requires="a"),
        _cb("c", requires="b"),
        _cb("tail", requires="a"),
    ]
    with pytest.raises(CyclicConstraintError) as exc_info:
        resolve_order(callbacks)

    cycle = exc_info.value.cycle
    assert set(cycle) == {"a", "b", "c"}
    assert len(cycle) == 4
    # a -> b -> c -> a, a partir de qualquer nó
    rotations = [["a", "b", "c"], ["b", "c", "a"], ["c", "a", "b"]]
    assert cycle[:3] in rotations


def test_self_reference_is_a_cycle():
    with pytest.raises(CyclicConstraintError) as exc_info:
        resolve_order([_cb("loop", requires="loop")])
    assert exc_info.value.cycle == ["loop", "loop"]


def test_group_invoke_surfaces_cycle_before_running_anything():
    ran = []
    group = CallbackGroup("action")
    group.add_callback("before", lambda ctx: ran.append("x"), "x", requires="y")
    group.add_callback("before", lambda ctx: ran.append("y"), "y", requires="x")

    with pytest.raises(CyclicConstraintError) as exc_info:
        group.invoke(None, lambda: ran.append("action"))

    assert ran == []
    assert exc_info.value.details["identity"] == "action"
