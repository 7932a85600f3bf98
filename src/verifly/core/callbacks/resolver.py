"""
Resolver de ordem de execução de callbacks (DAG).

Este módulo transforma os membros de um `CallbackGroup` e suas restrições
(`requires` / `insert_before`) em uma única ordem linear de execução,
determinística e reprodutível.

O resolver opera exclusivamente em nível estrutural, analisando:
    - nomes dos callbacks
    - restrições declaradas entre nomes
    - formação de ciclos

Princípios fundamentais:
    - O grafo de restrições deve formar um DAG
    - A ordenação é determinística para a mesma entrada
    - Empates são resolvidos pela ordem de inserção (ordenação estável)

Decisões arquiteturais:
    - Nós são ENTRADAS (índice de inserção), não nomes: após um merge,
      entradas homônimas coexistem e recebem as mesmas arestas
    - Utiliza Kahn com heap indexado por ordem de inserção
    - Referências a nomes ausentes não geram aresta (leniência deliberada)
    - Ciclos são falhas fatais, com diagnóstico dos nomes envolvidos

Invariantes:
    - Nenhum callback aparece antes de um nome que ele `requires`
    - Nenhum callback aparece depois de um nome que ele `insert_before`
    - Todas as entradas aparecem exatamente uma vez
    - A ordem resolvida não depende da posição (before/after/around)

Limites explícitos:
    - Não executa callbacks
    - Não separa callbacks por posição
    - Não registra callbacks nem valida unicidade de nomes
"""

from __future__ import annotations

import heapq
from typing import Dict, Iterable, List, Set, Tuple

from verifly.core.exceptions import CyclicConstraintError
from verifly.core.log import get_logger

from .types import Callback

logger = get_logger("resolver")

Edge = Tuple[int, int]


def build_edges(callbacks: List[Callback]) -> Set[Edge]:
    """
    Constrói o conjunto de arestas ``(origem, destino)`` entre índices.

    - ``r`` em ``c.requires``      → aresta ``r → c``
    - ``t`` em ``c.insert_before`` → aresta ``c → t``

    Nomes sem entrada correspondente são ignorados. Arestas repetidas
    colapsam naturalmente por se tratar de um conjunto.
    """
    by_name: Dict[str, List[int]] = {}
    for idx, cb in enumerate(callbacks):
        by_name.setdefault(cb.name, []).append(idx)

    edges: Set[Edge] = set()
    for idx, cb in enumerate(callbacks):
        for required in cb.requires:
            for src in by_name.get(required, ()):
                edges.add((src, idx))
        for target in cb.insert_before:
            for dst in by_name.get(target, ()):
                edges.add((idx, dst))
    return edges


def find_cycle(callbacks: List[Callback], edges: Iterable[Edge], residual: Set[int]) -> List[str]:
    """
    Extrai um ciclo concreto do subgrafo residual deixado pelo Kahn.

    Todo nó residual possui ao menos um predecessor também residual;
    caminhar por predecessores a partir do menor índice termina,
    necessariamente, repetindo um nó. O trecho repetido é o ciclo.

    Returns:
        List[str]: nomes na ordem do ciclo, com o primeiro repetido ao final.
    """
    predecessors: Dict[int, List[int]] = {}
    for src, dst in edges:
        if src in residual and dst in residual:
            predecessors.setdefault(dst, []).append(src)

    node = min(residual)
    path: List[int] = []
    seen: Dict[int, int] = {}
    while node not in seen:
        seen[node] = len(path)
        path.append(node)
        node = min(predecessors[node])

    # caminho percorrido ao contrário das arestas
    loop = path[seen[node]:]
    loop.reverse()
    names = [callbacks[i].name for i in loop]
    return names + [names[0]]


def resolve_order(callbacks: Iterable[Callback], *, identity: object = None) -> List[Callback]:
    """
    Valida e produz a ordem de execução topológica e estável dos callbacks.

    Sempre que múltiplos callbacks estiverem prontos, o de menor índice
    de inserção é escolhido, preservando a ordem original entre pares
    não restringidos.

    Args:
        callbacks (Iterable[Callback]): membros do grupo, em ordem de inserção.
        identity: identidade do grupo, usada apenas em diagnósticos.

    Returns:
        List[Callback]: callbacks em ordem topológica determinística.

    Raises:
        CyclicConstraintError: se as restrições formarem um ciclo.
    """
    members = list(callbacks)
    edges = build_edges(members)

    incoming_count: List[int] = [0] * len(members)
    outgoing: Dict[int, List[int]] = {idx: [] for idx in range(len(members))}
    for src, dst in edges:
        incoming_count[dst] += 1
        outgoing[src].append(dst)

    ready: List[int] = [idx for idx, c in enumerate(incoming_count) if c == 0]
    heapq.heapify(ready)
    order: List[int] = []

    while ready:
        idx = heapq.heappop(ready)  # menor índice de inserção
        order.append(idx)
        for child in outgoing[idx]:
            incoming_count[child] -= 1
            if incoming_count[child] == 0:
                heapq.heappush(ready, child)

    if len(order) != len(members):
        residual = set(range(len(members))) - set(order)
        cycle = find_cycle(members, edges, residual)
        logger.error("cyclic callback constraints in %r: %s", identity, " -> ".join(cycle))
        raise CyclicConstraintError(cycle, identity=identity)

    resolved = [members[idx] for idx in order]
    logger.debug("resolved %r: %s", identity, [c.name for c in resolved])
    return resolved
