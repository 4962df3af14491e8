# runner.py
from __future__ import annotations

import os
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from typing import Dict, Iterable, List, Optional, Tuple

from .context import StepContext
from .dag import build_graph, topo_levels
from .errors import StepFailure
from .links import StepLink
from .step import Step
from .ui.console import get_console

# Step statuses reported by run_steps()
OK = "ok"
SKIPPED_DONE = "skipped(done)"
FAILED = "failed"
BLOCKED = "blocked"


# ----------------------------------------------------------------------
# Execution primitives
# ----------------------------------------------------------------------

def _run_step(step: Step, ctx: StepContext, dry: bool, skip_done: bool) -> Tuple[str, str]:
    """
    Returns (step_name, status) where status is:
      - "skipped(done)"  (result already present and skip_done enabled)
      - "ok"
    Raises StepFailure on failures.
    """
    console = get_console()
    name = step.name()
    console.print_step_start(name, step.description())

    try:
        # dry-run reports what would be done, so nothing is skipped
        if skip_done and not dry and step.done(ctx):
            console.print_step_skipped(name, "already done")
            return name, SKIPPED_DONE
        step.run(ctx, dry)
    except Exception as e:
        raise StepFailure(step=name, description=step.description(), error=e) from e

    console.print_success(name)
    return name, OK


# ----------------------------------------------------------------------
# Public API
# ----------------------------------------------------------------------

def run_steps(
    steps: List[Step],
    ctx: StepContext,
    *,
    dry: bool = False,
    max_workers: int | None = None,
    fail_fast: bool = True,
    available: Iterable[StepLink] = (),
    skip_done: bool = True,
) -> Dict[str, str]:
    """
    Run steps in dependency order, independent steps in parallel.

    A step starts once every step creating one of its required links has
    finished with "ok" or "skipped(done)". Steps that never became ready
    (a dependency failed, or fail_fast stopped scheduling) end "blocked".
    """
    console = get_console()
    by_name = {s.name(): s for s in steps}
    adj, indeg = build_graph(steps, available=available)
    console.print_plan(topo_levels(adj, indeg))

    indeg = dict(indeg)
    ready: List[str] = sorted((name for name, deg in indeg.items() if deg == 0), reverse=True)
    results: Dict[str, str] = {}
    failed = False

    if max_workers is None:
        c = os.cpu_count() or 2
        max_workers = max(1, c - 1)

    in_flight: Dict[Future, str] = {}

    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        while ready or in_flight:
            # schedule all currently ready
            while ready and not (fail_fast and failed):
                name = ready.pop()
                fut = pool.submit(_run_step, by_name[name], ctx, dry, skip_done)
                in_flight[fut] = name

            if not in_flight:
                break

            # wait for one completion, then loop to schedule newly-ready steps
            fut = next(as_completed(list(in_flight.keys())))
            name = in_flight.pop(fut)

            try:
                _step_name, status = fut.result()
                results[name] = status
            except StepFailure as e:
                results[name] = FAILED
                console.print_failure(name, str(e.error), description=e.description)
                failed = True

            # unlock dependents only on success or skipped(done)
            if results[name] in (OK, SKIPPED_DONE):
                for nxt in sorted(adj[name], reverse=True):
                    indeg[nxt] -= 1
                    if indeg[nxt] == 0:
                        ready.append(nxt)

    for name in by_name:
        results.setdefault(name, BLOCKED)

    return results


def resolve_parameters(steps: Iterable[Step]) -> Tuple[Dict[str, str], Dict[str, Exception]]:
    """
    Evaluate every parameter the steps provide.

    Returns (values, errors); a failing resolver only loses its own value.
    """
    values: Dict[str, str] = {}
    errors: Dict[str, Exception] = {}
    for step in steps:
        params, _link = step.provides()
        for name, resolve in (params or {}).items():
            try:
                values[name] = resolve()
            except Exception as e:
                errors[name] = e
    return values, errors


def failed_steps(results: Dict[str, str]) -> Optional[List[str]]:
    failed = [name for name, status in results.items() if status in (FAILED, BLOCKED)]
    return failed or None
