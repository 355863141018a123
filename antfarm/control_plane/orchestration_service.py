"""
antfarm/control_plane/orchestration_service.py
──────────────────────────────────────────────
The thin orchestrator that turns a Farm into a Solution.

Pipeline
─────────
  1. admit_farm(farm)           — reject a non-positive ant count before
                                  any graph work (InvalidUnitCountError).
  2. deep copy the farm         — the extractor consumes links in place;
                                  the caller's farm must stay reusable.
  3. RouteExtractor.extract()   — edge-disjoint routes, possibly none.
  4. no routes → NoRouteFoundError. The scheduler is never entered.
  5. verify_routes()            — every route runs start → end over real
                                  links. A failure is an extractor bug
                                  (MalformedRouteError), never user error.
  6. MovementScheduler.run()    — assignment + turn simulation under the
                                  selected SchedulingPolicy.
  7. summarise_schedule()       — metrics for --stats.

No feedback between stages: extraction runs to exhaustion before the
first turn is simulated.

Error handling contract
────────────────────────
Every failure is a LeminError subclass and is terminal. There is no
partial result: the caller gets a complete Solution or an exception.
"""

from __future__ import annotations

import logging
import time
from collections import defaultdict, deque
from typing import Deque, Dict, FrozenSet, List, Optional

from pydantic import BaseModel, Field

from antfarm.control_plane.admission_controller import admit_farm
from antfarm.control_plane.policy import SchedulingPolicy, resolve_policy
from antfarm.shared.errors import MalformedRouteError, NoRouteFoundError
from antfarm.shared.models import Farm, Route, Schedule
from antfarm.shared.telemetry import ScheduleMetrics, summarise_schedule
from lemin_core.extractor import RouteExtractor
from lemin_core.movement import MovementScheduler

logger = logging.getLogger(__name__)


class Solution(BaseModel):
    """
    Everything the formatter and the CLI need from one solve.

    Fields:
        farm     → The farm as given by the caller, links untouched.
        routes   → Extracted routes, in discovery order.
        schedule → Assignment and move log.
        metrics  → Summary numbers for reporting.
        policy   → Name of the SchedulingPolicy used.
    """
    farm: Farm
    routes: List[Route] = Field(default_factory=list)
    schedule: Schedule
    metrics: ScheduleMetrics
    policy: str


def verify_routes(farm: Farm, routes: List[Route]) -> None:
    """
    Check that every route runs from farm.start to farm.end over real links
    and that no link is shared between routes.

    Raises:
        MalformedRouteError: on the first offending route.
    """
    start, end = farm.start, farm.end
    unclaimed = _link_index(farm)

    for route in routes:
        if route.first != start or route.last != end:
            raise MalformedRouteError(
                route.rooms, f"does not run from {start!r} to {end!r}"
            )
        for a, b in route.edges():
            free = unclaimed.get(frozenset((a, b)))
            if free is None:
                raise MalformedRouteError(
                    route.rooms, f"no link between {a!r} and {b!r}"
                )
            if not free:
                raise MalformedRouteError(
                    route.rooms, f"link {a}-{b} is already used by another route"
                )
            free.popleft()


def _link_index(farm: Farm) -> Dict[FrozenSet[str], Deque[int]]:
    # Parallel duplicate links are distinct edges, each usable once.
    index: Dict[FrozenSet[str], Deque[int]] = defaultdict(deque)
    for idx, link in enumerate(farm.links):
        index[frozenset((link.from_room, link.to_room))].append(idx)
    return dict(index)


class OrchestrationService:
    """
    Runs the solve pipeline for farms under one scheduling policy.

    Usage:
        service = OrchestrationService()                 # per-route policy
        solution = service.solve(farm)

        service = OrchestrationService(resolve_policy("room-exclusive"))

    Attributes:
        policy      : SchedulingPolicy forwarded to the scheduler.
        last_run_ms : Wall-clock duration of the last solve() call.
    """

    def __init__(self, policy: Optional[SchedulingPolicy] = None) -> None:
        self.policy = policy if policy is not None else resolve_policy()
        self.last_run_ms: float = 0.0

    def extract(self, farm: Farm) -> List[Route]:
        """Routes for `farm`, extracted from a private copy of its links."""
        working = farm.model_copy(deep=True)
        return RouteExtractor(working).extract()

    def solve(self, farm: Farm) -> Solution:
        """
        Admission, extraction, verification, scheduling.

        Raises:
            InvalidUnitCountError:  farm.unit_count ≤ 0.
            NoRouteFoundError:      start and end not connected (or missing).
            MalformedRouteError:    extractor produced an invalid route.
            SchedulingStalledError: room-exclusive policy deadlocked.
        """
        started = time.perf_counter()

        admit_farm(farm)

        routes = self.extract(farm)
        if not routes:
            raise NoRouteFoundError(farm.start, farm.end)

        verify_routes(farm, routes)

        schedule = MovementScheduler(
            routes,
            farm.unit_count,
            room_exclusive=self.policy.room_exclusive,
            max_admissions_per_turn=self.policy.max_admissions_per_turn,
        ).run()
        metrics = summarise_schedule(schedule)

        self.last_run_ms = (time.perf_counter() - started) * 1000.0
        logger.info(
            "solve: %d ant(s), %d route(s), %d turn(s) under %r (%.2fms).",
            farm.unit_count, len(routes), schedule.turn_count,
            self.policy.name, self.last_run_ms,
        )
        return Solution(
            farm=farm,
            routes=routes,
            schedule=schedule,
            metrics=metrics,
            policy=self.policy.name,
        )

    def __repr__(self) -> str:
        return (
            f"OrchestrationService(policy={self.policy.name!r}, "
            f"last_run_ms={self.last_run_ms:.2f})"
        )


def solve_farm(farm: Farm, policy: Optional[SchedulingPolicy] = None) -> Solution:
    """Functional wrapper: OrchestrationService(policy).solve(farm)."""
    return OrchestrationService(policy).solve(farm)
