from __future__ import annotations

import pytest

from aya.app.navigation import RouteNavigator


def _navigator():
    shown = []
    nav = RouteNavigator()
    for route in ("/", "/palette", "/result"):
        nav.register(route, lambda name=route: shown.append(name))
    return nav, shown


def test_push_and_back() -> None:
    nav, shown = _navigator()

    nav.push("/")
    nav.push("/palette")
    nav.push("/result")
    assert nav.back() is True

    assert shown == ["/", "/palette", "/result", "/palette"]
    assert nav.current == "/palette"


def test_replace_swaps_current_entry() -> None:
    nav, shown = _navigator()
    nav.push("/")
    nav.push("/palette")

    nav.replace("/")

    assert nav.history == ["/", "/"]
    assert shown[-1] == "/"


def test_replace_on_empty_history_and_back_limit() -> None:
    nav, _ = _navigator()

    nav.replace("/")

    assert nav.history == ["/"]
    assert nav.back() is False


def test_unknown_route_raises() -> None:
    nav, _ = _navigator()

    with pytest.raises(ValueError):
        nav.push("/missing")
    assert nav.history == []
