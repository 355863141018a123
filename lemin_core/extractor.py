"""
lemin_core/extractor.py
───────────────────────
The route extractor: peels edge-disjoint start → end routes off the farm.

How extraction works
─────────────────────
  1. Run an unweighted breadth-first search from start over every link
     whose `available` flag is still set. Links are undirected.
  2. If the search reaches end, walk the parent pointers back to start to
     get the route, clear `available` on every link the route used, and
     append the route to the result.
  3. Repeat until a search fails.

Each search returns a shortest route by hop count among the links still
available. Earlier routes therefore get first pick of the short edges, and
later routes have to detour around what is left.

This is NOT a max-flow computation. Links are never given back, so a greedy
early route can block two better ones. That is an accepted simplification.
Node-disjointness is not enforced either: two routes may share an
intermediate room as long as they share no link.

Ordering is part of the contract
─────────────────────────────────
Ties between equally short routes are broken by link discovery order,
which follows input order. Adjacency lists are built by one pass over
farm.links, so neighbours are always expanded in the order their links
appear in the input file. Nothing here iterates over a set.

Which link gets consumed
─────────────────────────
The search remembers, for every room it discovers, the index of the link it
came through. On success exactly those links are cleared. With duplicate
parallel links (A-B listed twice) the twin that was actually walked is the
one consumed, never one that an earlier route already holds.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Dict, List, Optional, Tuple

from antfarm.shared.models import Farm, Route

logger = logging.getLogger(__name__)

# (link index, neighbour room) in link input order
Adjacency = Dict[str, List[Tuple[int, str]]]


class RouteExtractor:
    """
    Extracts edge-disjoint routes from one farm.

    Usage:
        extractor = RouteExtractor(farm)
        routes = extractor.extract()        # List[Route], may be empty

    The extractor mutates farm.links[*].available in place. Give it a farm
    you own exclusively; the orchestration service passes a deep copy.

    Attributes:
        _farm:      The farm whose links are consumed.
        _start:     Start room name (None if the farm has none).
        _end:       End room name (None if the farm has none).
        _adjacency: room → [(link index, neighbour)] in link order.
    """

    def __init__(
        self,
        farm: Farm,
        start: Optional[str] = None,
        end: Optional[str] = None,
    ) -> None:
        self._farm = farm
        self._start = start if start is not None else farm.start
        self._end = end if end is not None else farm.end
        self._adjacency = self._build_adjacency(farm)

    @staticmethod
    def _build_adjacency(farm: Farm) -> Adjacency:
        adjacency: Adjacency = {}
        for idx, link in enumerate(farm.links):
            adjacency.setdefault(link.from_room, []).append((idx, link.to_room))
            adjacency.setdefault(link.to_room, []).append((idx, link.from_room))
        return adjacency

    # ── Public API ────────────────────────────────────────────────────────────

    def extract(self) -> List[Route]:
        """
        Run searches until none succeeds and return the routes in the order
        they were found.

        Returns an empty list, without raising, when start or end is unset,
        is not a room of the farm, or start == end. Deciding whether an
        empty result is an error is the caller's job.
        """
        if not self._endpoints_usable():
            logger.info(
                "RouteExtractor: start=%r end=%r unusable, no routes extracted.",
                self._start, self._end,
            )
            return []

        routes: List[Route] = []
        while True:
            found = self._search()
            if found is None:
                break
            rooms, link_indices = found
            self._consume(link_indices)
            route = Route(rooms=tuple(rooms))
            logger.debug(
                "RouteExtractor: route %d (%d hops): %s",
                len(routes), route.hop_length, route,
            )
            routes.append(route)

        logger.info(
            "RouteExtractor: %d edge-disjoint route(s) from %r to %r.",
            len(routes), self._start, self._end,
        )
        return routes

    # ── Internals ─────────────────────────────────────────────────────────────

    def _endpoints_usable(self) -> bool:
        if self._start is None or self._end is None:
            return False
        if self._start == self._end:
            return False
        return self._farm.has_room(self._start) and self._farm.has_room(self._end)

    def _search(self) -> Optional[Tuple[List[str], List[int]]]:
        """
        One BFS over available links.

        Returns (rooms, link indices along the route) or None if end is
        unreachable. Rooms are marked visited when enqueued, so the first
        parent recorded for a room is the one kept.
        """
        links = self._farm.links
        start, end = self._start, self._end

        parent: Dict[str, Tuple[str, int]] = {}
        visited = {start}
        queue = deque([start])

        while queue:
            current = queue.popleft()
            if current == end:
                return self._unwind(parent, start, end)

            for link_idx, neighbour in self._adjacency.get(current, []):
                if not links[link_idx].available:
                    continue
                if neighbour in visited:
                    continue
                visited.add(neighbour)
                parent[neighbour] = (current, link_idx)
                queue.append(neighbour)

        return None

    @staticmethod
    def _unwind(
        parent: Dict[str, Tuple[str, int]],
        start: str,
        end: str,
    ) -> Tuple[List[str], List[int]]:
        rooms = [end]
        link_indices: List[int] = []
        current = end
        while current != start:
            current, link_idx = parent[current]
            rooms.append(current)
            link_indices.append(link_idx)
        rooms.reverse()
        link_indices.reverse()
        return rooms, link_indices

    def _consume(self, link_indices: List[int]) -> None:
        # Irrevocable: nothing ever sets available back to True.
        for idx in link_indices:
            self._farm.links[idx].available = False


def extract_routes(
    farm: Farm,
    start: Optional[str] = None,
    end: Optional[str] = None,
) -> List[Route]:
    """
    Functional wrapper around RouteExtractor.

    Args:
        farm:  The farm to extract from. Its links are consumed in place.
        start: Override for the start room (defaults to farm.start).
        end:   Override for the end room (defaults to farm.end).

    Returns:
        Edge-disjoint routes in discovery order, possibly empty.
    """
    return RouteExtractor(farm, start=start, end=end).extract()
