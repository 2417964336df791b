from __future__ import annotations

import pytest
from conftest import FakeDriver, FakeElement

from testgenius.server.definitions import SELECTOR_STRATEGIES
from testgenius.tools.selectors import (
    FALLBACK_ORDER,
    SelectorStrategy,
    StrategiesExhaustedError,
    build_query,
    fallback_sequence,
    handle_exists,
    resolve,
    resolve_with_fallback,
)


@pytest.mark.parametrize(
    ("strategy", "expected"),
    [
        ("css", "button.primary"),
        ("xpath", "xpath=button.primary"),
        ("id", "#button.primary"),
        ("name", '[name="button.primary"]'),
        ("text", "//*[contains(text(), 'button.primary')]"),
        ("exact-text", "//*[text()='button.primary']"),
    ],
)
def test_build_query_per_strategy(strategy: str, expected: str) -> None:
    assert build_query("button.primary", strategy) == expected


def test_unknown_strategy_is_treated_as_css() -> None:
    assert SelectorStrategy.parse("magic") is SelectorStrategy.CSS
    assert SelectorStrategy.parse(None) is SelectorStrategy.CSS
    assert build_query("#login", "magic") == "#login"


def test_strategy_enum_matches_advertised_schema() -> None:
    assert [s.value for s in SelectorStrategy] == list(SELECTOR_STRATEGIES)


def test_fallback_sequence_puts_requested_first_without_repeats() -> None:
    seq = fallback_sequence("css")
    assert seq[0] is SelectorStrategy.CSS
    assert seq[1:] == [SelectorStrategy.TEXT, SelectorStrategy.XPATH, SelectorStrategy.ID, SelectorStrategy.NAME]

    seq = fallback_sequence("exact-text")
    assert seq == [SelectorStrategy.EXACT_TEXT, *FALLBACK_ORDER]


def test_resolve_swallows_driver_errors(driver: FakeDriver) -> None:
    driver.broken.add("##bad")
    assert resolve(driver, "##bad", "css") is None


def test_handle_exists_tolerates_none_and_raising_handles() -> None:
    class Exploding(FakeElement):
        def exists(self) -> bool:
            raise RuntimeError("stale")

    assert handle_exists(None) is False
    assert handle_exists(Exploding()) is False
    assert handle_exists(FakeElement()) is True


def test_resolve_with_fallback_prefers_requested_strategy(driver: FakeDriver) -> None:
    el = driver.add("#submit")
    res = resolve_with_fallback(driver, "#submit", "css", tool="smart_click")
    assert res.handle is el
    assert res.strategy is SelectorStrategy.CSS
    assert driver.queries == ["#submit"]


def test_resolve_with_fallback_walks_cascade_in_order(driver: FakeDriver) -> None:
    el = driver.add('[name="Login"]')
    res = resolve_with_fallback(driver, "Login", "css", tool="smart_click")
    assert res.handle is el
    assert res.strategy is SelectorStrategy.NAME
    assert driver.queries == [
        "Login",
        "//*[contains(text(), 'Login')]",
        "xpath=Login",
        "#Login",
        '[name="Login"]',
    ]


def test_resolve_with_fallback_raises_when_exhausted(driver: FakeDriver) -> None:
    with pytest.raises(StrategiesExhaustedError) as ei:
        resolve_with_fallback(driver, "Nope", "text", tool="smart_click")
    assert str(ei.value) == "Element not found using any strategy: Nope"
    assert len(driver.queries) == 5
