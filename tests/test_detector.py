from __future__ import annotations

from conftest import FakeDriver

from testgenius.tools.detector import (
    SmartElementDetector,
    calculate_confidence,
    description_words,
    generate_strategies,
)


def test_description_words_skip_short_tokens() -> None:
    assert description_words("go to the login page") == ["the", "login", "page"]


def test_strategies_are_priority_ordered() -> None:
    names = [s.name for s in generate_strategies("login button", "button")]
    assert names == [
        "Accessibility Name",
        "Text-based",
        "button Text",
        "Data Attributes",
        "ARIA Attributes",
        "Button Patterns",
        "Generic Fallback",
    ]


def test_input_patterns_only_for_fields() -> None:
    names = [s.name for s in generate_strategies("email field")]
    assert "Input Patterns" in names
    assert "Button Patterns" not in names
    assert "email field Text" not in names


def test_confidence_scoring() -> None:
    strategies = {s.name: s for s in generate_strategies("login button")}
    assert calculate_confidence(strategies["Accessibility Name"], "//*[@aria-label='login']", "login button") == 100
    assert calculate_confidence(strategies["Data Attributes"], '[data-testid*="login"]', "login button") == 75
    assert calculate_confidence(strategies["Generic Fallback"], "button", "login button") == 25


def test_detect_returns_first_match_and_caches(driver: FakeDriver) -> None:
    el = driver.add('[data-testid*="checkout"]')
    detector = SmartElementDetector(driver)

    match = detector.detect("checkout now")
    assert match is not None
    assert match.element is el
    assert match.strategy == "Data Attributes"
    assert match.selector == '[data-testid*="checkout"]'

    queries = len(driver.queries)
    assert detector.detect("checkout now") is match
    assert len(driver.queries) == queries

    stats = detector.cache_stats()
    assert stats == {"size": 1, "hits": 1, "misses": 1, "hitRate": 0.5}

    detector.clear_cache()
    assert detector.cache_stats()["size"] == 0


def test_detect_none_when_nothing_matches(driver: FakeDriver) -> None:
    detector = SmartElementDetector(driver)
    assert detector.detect("imaginary widget", "div") is None
    assert detector.cache_stats()["size"] == 0


def test_detect_skips_selectors_that_raise(driver: FakeDriver) -> None:
    driver.broken.add("//*[@aria-label='save' or @alt='save' or @title='save']")
    el = driver.add("//*[text()='save']")
    match = SmartElementDetector(driver).detect("save")
    assert match is not None
    assert match.element is el
    assert match.strategy == "Text-based"
