"""Route lookup and alias resolution (core domain).

Many origin/destination pairs can share one content page: the pair's
catalog entry carries a ``link`` naming the route that holds the content.
Resolution is split in two steps so each can be tested on its own:

- ``find_route_by_endpoints`` locates the entry for an ordered pair;
- ``resolve_alias`` follows ``link`` until it reaches an authoritative route.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from core.errors import RouteAliasCycleError
from core.models import RouteInfo
from core.ports import CatalogPort

LOGGER = logging.getLogger(__name__)


class RouteResolver:
    """Resolves route pages by name or by (origin, destination)."""

    def __init__(self, catalog: CatalogPort) -> None:
        self._catalog = catalog

    def get_all_routes(self) -> List[RouteInfo]:
        return list(self._catalog.get_route_infos())

    def get_route(self, name: str) -> Optional[RouteInfo]:
        if not name or not name.strip():
            return None
        return self._catalog.get_route_info(name)

    def find_route_by_endpoints(self, start_name: str, end_name: str) -> Optional[RouteInfo]:
        """Return the first route going exactly from ``start_name`` to ``end_name``.

        Direction matters: a route A -> B never answers a lookup for B -> A.
        """

        for route in self._catalog.get_route_infos():
            if route.start.name == start_name and route.end.name == end_name:
                return route
        return None

    def resolve_alias(self, route: RouteInfo) -> RouteInfo:
        """Follow ``link`` until a route without one is reached.

        Returns the empty ``RouteInfo()`` when a link names a missing route and
        raises RouteAliasCycleError when a link leads back to a visited route.
        """

        chain = [route.name]
        current = route
        while current.is_alias:
            target = current.link.strip()
            if target in chain:
                raise RouteAliasCycleError(chain + [target])
            chain.append(target)
            linked = self.get_route(target)
            if linked is None:
                LOGGER.warning("Route %s links to missing route %s", current.name, target)
                return RouteInfo()
            current = linked
        return current

    def get_route_between(self, start_name: str, end_name: str) -> RouteInfo:
        """Return the authoritative route for a pair, or the empty ``RouteInfo()``.

        Only pair entries that link elsewhere produce content; an unmatched
        pair or a matched entry without a link both yield the empty value.
        """

        route = self.find_route_by_endpoints(start_name, end_name)
        if route is None or not route.is_alias:
            return RouteInfo()
        return self.resolve_alias(route)
