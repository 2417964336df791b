"""
Description-driven element detection.

Turns a loose description ("login button") into prioritized groups of
query expressions and returns the first one that matches, with a confidence
score. No model calls; every strategy is a plain selector. Results are
cached per (description, element type) for the life of the detector.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ..driver import Driver, ElementHandle
from .selectors import SelectorStrategy, build_query, handle_exists

logger = logging.getLogger("testgenius.tools.detector")

GENERIC_SELECTORS = frozenset({"button", "input", "a"})


@dataclass(frozen=True)
class DetectionStrategy:
    name: str
    priority: int
    selectors: tuple[str, ...]


@dataclass(frozen=True)
class ElementMatch:
    element: ElementHandle
    confidence: int
    strategy: str
    selector: str


@dataclass
class _CacheStats:
    hits: int = 0
    misses: int = 0


def description_words(description: str) -> list[str]:
    return [w for w in description.split(" ") if len(w) > 2]


def generate_strategies(description: str, element_type: str | None = None) -> list[DetectionStrategy]:
    words = description_words(description)
    lowered = description.lower()

    strategies = [
        DetectionStrategy(
            "Accessibility Name",
            1,
            tuple(f"//*[@aria-label='{w}' or @alt='{w}' or @title='{w}']" for w in words),
        ),
        DetectionStrategy(
            "Text-based",
            2,
            (
                *(build_query(w, SelectorStrategy.EXACT_TEXT) for w in words),
                *(f"//a[contains(., '{w}')]" for w in words),
                *(build_query(w, SelectorStrategy.TEXT) for w in words),
            ),
        ),
    ]
    if element_type:
        strategies.append(
            DetectionStrategy(
                f"{element_type} Text",
                3,
                tuple(f"//{element_type}[contains(., '{w}')]" for w in words),
            )
        )
    strategies.append(DetectionStrategy("Data Attributes", 4, tuple(f'[data-testid*="{w}"]' for w in words)))
    strategies.append(DetectionStrategy("ARIA Attributes", 5, tuple(f'[aria-label*="{w}"]' for w in words)))
    if "button" in lowered:
        strategies.append(DetectionStrategy("Button Patterns", 6, ("button", '[role="button"]', ".btn", ".button")))
    if "input" in lowered or "field" in lowered:
        strategies.append(DetectionStrategy("Input Patterns", 6, ("input", "textarea", "select")))
    strategies.append(DetectionStrategy("Generic Fallback", 7, ("button", "input", "a", '[role="button"]')))

    # Stable sort keeps insertion order among equal priorities.
    return sorted(strategies, key=lambda s: s.priority)


def calculate_confidence(strategy: DetectionStrategy, selector: str, description: str) -> int:
    confidence = 100 - (strategy.priority - 1) * 10
    confidence += 5 * sum(1 for w in description_words(description) if w in selector)
    if selector in GENERIC_SELECTORS:
        confidence -= 20
    return max(0, min(100, confidence))


@dataclass
class SmartElementDetector:
    driver: Driver
    _cache: dict[str, ElementMatch] = field(default_factory=dict, repr=False)
    _stats: _CacheStats = field(default_factory=_CacheStats, repr=False)

    def detect(self, description: str, element_type: str | None = None) -> ElementMatch | None:
        cache_key = f"{description}_{element_type or 'any'}"
        cached = self._cache.get(cache_key)
        if cached is not None:
            self._stats.hits += 1
            logger.debug("using cached element: %s", cached.strategy)
            return cached
        self._stats.misses += 1

        for strategy in generate_strategies(description, element_type):
            match = self._try_strategy(strategy, description)
            if match is not None:
                self._cache[cache_key] = match
                logger.info("found element using %s (%d%% confidence)", match.strategy, match.confidence)
                return match

        logger.info("no element found for: %s", description)
        return None

    def _try_strategy(self, strategy: DetectionStrategy, description: str) -> ElementMatch | None:
        for selector in strategy.selectors:
            try:
                element = self.driver.query(selector)
            except Exception:  # noqa: BLE001
                continue
            if handle_exists(element):
                return ElementMatch(
                    element=element,
                    confidence=calculate_confidence(strategy, selector, description),
                    strategy=strategy.name,
                    selector=selector,
                )
        return None

    def clear_cache(self) -> None:
        self._cache.clear()

    def cache_stats(self) -> dict[str, float]:
        lookups = self._stats.hits + self._stats.misses
        return {
            "size": len(self._cache),
            "hits": self._stats.hits,
            "misses": self._stats.misses,
            "hitRate": (self._stats.hits / lookups) if lookups else 0.0,
        }
