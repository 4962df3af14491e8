# dag.py
from __future__ import annotations

from typing import Dict, Iterable, List, Set, Tuple

from .errors import GraphError
from .links import StepLink
from .step import Step


def build_graph(
    steps: List[Step],
    available: Iterable[StepLink] = (),
) -> Tuple[Dict[str, Set[str]], Dict[str, int]]:
    """
    Build a DAG from steps.

    There is no explicit adjacency list: an edge producer -> consumer exists
    whenever a link the consumer requires() is in the producer's creates().
    Links in `available` are satisfied before anything runs.

    Returns:
      adj:   step name -> names of steps that depend on it
      indeg: step name -> number of steps it waits for
    """
    names = [s.name() for s in steps]
    if len(set(names)) != len(names):
        dupes = sorted({n for n in names if names.count(n) > 1})
        raise GraphError(f"Duplicate step names found: {dupes}")

    producers: Dict[StepLink, Set[str]] = {}
    for step in steps:
        for link in step.creates():
            producers.setdefault(link, set()).add(step.name())

    satisfied = set(available)
    adj: Dict[str, Set[str]] = {n: set() for n in names}
    indeg: Dict[str, int] = {n: 0 for n in names}

    for step in steps:
        for link in step.requires():
            makers = producers.get(link, set()) - {step.name()}
            if not makers:
                if link in satisfied:
                    continue
                raise GraphError(
                    f"Step '{step.name()}' requires {link}, which no step creates. "
                    f"Known steps: {sorted(names)}"
                )
            for maker in sorted(makers):
                # Edge maker -> step (maker must run before step)
                if step.name() not in adj[maker]:
                    adj[maker].add(step.name())
                    indeg[step.name()] += 1

    return adj, indeg


def topo_levels(adj: Dict[str, Set[str]], indeg: Dict[str, int]) -> List[List[str]]:
    """
    Group steps into levels: every step's producers sit in earlier levels,
    so the steps of one level can run in parallel.

    Raises GraphError if some steps can never become ready (a cycle).
    """
    pending = dict(indeg)
    levels: List[List[str]] = []
    current = sorted(n for n, d in pending.items() if d == 0)

    while current:
        levels.append(current)
        unlocked: Set[str] = set()
        for node in current:
            del pending[node]
            for child in adj.get(node, ()):
                pending[child] -= 1
                if pending[child] == 0:
                    unlocked.add(child)
        current = sorted(unlocked)

    if pending:
        raise GraphError(f"Step graph has a cycle. Stuck steps: {sorted(pending)}")

    return levels
