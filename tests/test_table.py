"""Tests for wren.routing.table — ordered, method-keyed route storage."""

import threading

import pytest

from wren.errors import RouteNotFound
from wren.routing.route import Route, RouteSpec
from wren.routing.table import HTTP_METHODS, RouteTable


def _handler() -> str:
    return "ok"


def _route(template: str, method: str = "GET", name: str | None = None) -> Route:
    return Route.build(method, RouteSpec(template, _handler, name=name))


class TestRegister:
    def test_preserves_registration_order(self) -> None:
        table = RouteTable()
        first, second, third = _route("/b"), _route("/a"), _route("/c")
        for route in (first, second, third):
            table.register("GET", route)
        assert table.routes_for("GET") == (first, second, third)

    def test_never_deduplicates(self) -> None:
        table = RouteTable()
        route = _route("/same")
        table.register("GET", route)
        table.register("GET", route)
        assert len(table.routes_for("GET")) == 2

    def test_method_is_case_insensitive(self) -> None:
        table = RouteTable()
        route = _route("/users")
        table.register("get", route)
        assert table.routes_for("GET") == (route,)
        assert table.routes_for("Get") == (route,)
        assert table.has_method("gEt")

    def test_unknown_method_is_empty(self) -> None:
        table = RouteTable()
        assert table.routes_for("POST") == ()
        assert table.has_method("POST") is False

    def test_methods(self) -> None:
        table = RouteTable()
        table.register("GET", _route("/"))
        table.register("DELETE", _route("/", "DELETE"))
        assert table.methods == frozenset({"GET", "DELETE"})

    def test_routes_lists_everything_in_table_order(self) -> None:
        table = RouteTable()
        a, b, c = _route("/a"), _route("/b", "POST"), _route("/c")
        for route in (a, b, c):
            table.register(route.method, route)
        assert table.routes == [a, c, b]
        assert len(table) == 3

    def test_concurrent_registration_keeps_every_route(self) -> None:
        table = RouteTable()

        def register_many(prefix: str) -> None:
            for i in range(50):
                table.register("GET", _route(f"/{prefix}/{i}"))

        threads = [threading.Thread(target=register_many, args=(str(n),)) for n in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert len(table.routes_for("GET")) == 200


class TestFindByName:
    def test_finds_named_route(self) -> None:
        table = RouteTable()
        route = _route("/user/{id}", name="user.show")
        table.register("GET", _route("/"))
        table.register("GET", route)
        assert table.find_by_name("user.show") is route

    def test_duplicate_names_first_wins(self) -> None:
        table = RouteTable()
        first = _route("/one", name="dup")
        second = _route("/two", name="dup")
        table.register("GET", first)
        table.register("GET", second)
        assert table.find_by_name("dup") is first

    def test_searches_across_methods(self) -> None:
        table = RouteTable()
        route = _route("/user", "POST", name="user.create")
        table.register("GET", _route("/"))
        table.register("POST", route)
        assert table.find_by_name("user.create") is route

    def test_unknown_name_raises(self) -> None:
        table = RouteTable()
        table.register("GET", _route("/", name="home"))
        with pytest.raises(RouteNotFound, match="'missing'"):
            table.find_by_name("missing")


class TestFreeze:
    def test_register_after_freeze_raises(self) -> None:
        table = RouteTable()
        table.freeze()
        with pytest.raises(RuntimeError, match="frozen"):
            table.register("GET", _route("/"))

    def test_freeze_is_idempotent(self) -> None:
        table = RouteTable()
        table.register("GET", _route("/"))
        table.freeze()
        table.freeze()
        assert table.frozen is True
        assert len(table.routes_for("GET")) == 1

    def test_frozen_snapshot_keeps_order(self) -> None:
        table = RouteTable()
        a, b = _route("/a"), _route("/b")
        table.register("GET", a)
        table.register("GET", b)
        table.freeze()
        assert table.routes_for("GET") == (a, b)

    def test_repr(self) -> None:
        table = RouteTable()
        assert "open" in repr(table)
        table.freeze()
        assert "frozen" in repr(table)


def test_standard_methods() -> None:
    assert set(HTTP_METHODS) == {"GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD"}
