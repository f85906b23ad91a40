from __future__ import annotations

from typing import Optional

import pytest

from core.errors import RouteAliasCycleError
from core.models import RouteEndpoint, RouteInfo
from core.routes import RouteResolver


class FakeCatalog:
    def __init__(self, routes: list[RouteInfo]) -> None:
        self.routes = routes
        self.name_lookups: list[str] = []

    def get_route_infos(self) -> list[RouteInfo]:
        return list(self.routes)

    def get_route_info(self, name: str) -> Optional[RouteInfo]:
        self.name_lookups.append(name)
        for route in self.routes:
            if route.name == name:
                return route
        return None


def _route(name: str, start: str = "", end: str = "", link: str = "", content: str = "") -> RouteInfo:
    return RouteInfo(
        start=RouteEndpoint(start),
        end=RouteEndpoint(end),
        name=name,
        link=link,
        content=content,
        meta_keywords=f"{name} keywords",
        meta_description=f"{name} description",
    )


def _catalog() -> FakeCatalog:
    return FakeCatalog(
        [
            _route("minsk-brest", start="Minsk", end="Brest", link="R1"),
            _route("R1", start="Minsk", end="Brest region", content="Buses to Brest"),
            _route("plain", start="Minsk", end="Grodno", content="No alias here"),
        ]
    )


def test_pair_with_link_returns_authoritative_route() -> None:
    resolver = RouteResolver(_catalog())

    route = resolver.get_route_between("Minsk", "Brest")

    assert route.name == "R1"
    assert route.content == "Buses to Brest"
    assert route.meta_keywords == "R1 keywords"
    assert route.meta_description == "R1 description"


def test_unknown_pair_returns_empty_route() -> None:
    resolver = RouteResolver(_catalog())

    route = resolver.get_route_between("Gomel", "Vitebsk")

    assert route == RouteInfo()
    assert route.is_empty


def test_pair_lookup_is_order_sensitive() -> None:
    resolver = RouteResolver(_catalog())

    assert resolver.find_route_by_endpoints("Brest", "Minsk") is None
    assert resolver.get_route_between("Brest", "Minsk").is_empty


def test_matched_pair_without_link_returns_empty_route() -> None:
    resolver = RouteResolver(_catalog())

    assert resolver.find_route_by_endpoints("Minsk", "Grodno").name == "plain"
    assert resolver.get_route_between("Minsk", "Grodno").is_empty


def test_whitespace_link_counts_as_no_link() -> None:
    catalog = FakeCatalog([_route("blank", start="A", end="B", link="   ")])

    assert RouteResolver(catalog).get_route_between("A", "B").is_empty
    assert catalog.name_lookups == []


def test_first_matching_pair_wins() -> None:
    catalog = FakeCatalog(
        [
            _route("first", start="A", end="B", link="target"),
            _route("second", start="A", end="B", link="other"),
            _route("target", content="target content"),
            _route("other", content="other content"),
        ]
    )

    assert RouteResolver(catalog).get_route_between("A", "B").content == "target content"


def test_resolve_alias_follows_several_hops() -> None:
    catalog = FakeCatalog(
        [
            _route("pair", start="A", end="B", link="hop"),
            _route("hop", link="final"),
            _route("final", content="final content"),
        ]
    )

    route = RouteResolver(catalog).get_route_between("A", "B")

    assert route.name == "final"
    assert catalog.name_lookups == ["hop", "final"]


def test_resolve_alias_detects_cycles() -> None:
    catalog = FakeCatalog(
        [
            _route("pair", start="A", end="B", link="x"),
            _route("x", link="y"),
            _route("y", link="x"),
        ]
    )

    with pytest.raises(RouteAliasCycleError) as excinfo:
        RouteResolver(catalog).get_route_between("A", "B")

    assert excinfo.value.chain == ["pair", "x", "y", "x"]


def test_resolve_alias_with_missing_target_returns_empty_route() -> None:
    catalog = FakeCatalog([_route("pair", start="A", end="B", link="gone")])

    assert RouteResolver(catalog).get_route_between("A", "B").is_empty


def test_resolve_alias_returns_authoritative_route_unchanged() -> None:
    route = _route("R1", content="content")

    assert RouteResolver(FakeCatalog([route])).resolve_alias(route) is route


def test_get_route_by_name() -> None:
    resolver = RouteResolver(_catalog())

    assert resolver.get_route("R1").content == "Buses to Brest"
    assert resolver.get_route("missing") is None
    assert resolver.get_route("  ") is None
    assert len(resolver.get_all_routes()) == 3


def test_catalog_errors_propagate() -> None:
    class BrokenCatalog(FakeCatalog):
        def get_route_infos(self) -> list[RouteInfo]:
            raise ConnectionError("database is down")

    with pytest.raises(ConnectionError):
        RouteResolver(BrokenCatalog([])).get_route_between("A", "B")
