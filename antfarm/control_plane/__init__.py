"""
antfarm/control_plane — admission, policy and the solve pipeline.

Public API:
    admit_farm()            — admission checks, raises InvalidUnitCountError
    check_unit_count()      — the ant count rule on its own
    SchedulingPolicy        — dataclass: scheduler knobs under a name
    resolve_policy()        — name → SchedulingPolicy
    OrchestrationService    — farm → Solution
    solve_farm()            — functional wrapper around OrchestrationService
    verify_routes()         — defensive route check, raises MalformedRouteError
    Solution                — routes + schedule + metrics
"""

from antfarm.control_plane.admission_controller import admit_farm, check_unit_count
from antfarm.control_plane.policy import (
    PER_ROUTE,
    ROOM_EXCLUSIVE,
    SINGLE_ADMISSION,
    SchedulingPolicy,
    policy_names,
    resolve_policy,
)
from antfarm.control_plane.orchestration_service import (
    OrchestrationService,
    Solution,
    solve_farm,
    verify_routes,
)

__all__ = [
    "admit_farm",
    "check_unit_count",
    "SchedulingPolicy",
    "PER_ROUTE",
    "ROOM_EXCLUSIVE",
    "SINGLE_ADMISSION",
    "policy_names",
    "resolve_policy",
    "OrchestrationService",
    "Solution",
    "solve_farm",
    "verify_routes",
]
