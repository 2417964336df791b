"""
Selector strategy resolution.

A strategy tag plus a raw target string yields a driver query expression:

    css         raw string, verbatim
    xpath       xpath=<raw>
    id          #<raw>
    name        [name="<raw>"]
    text        //*[contains(text(), '<raw>')]
    exact-text  //*[text()='<raw>']

`resolve` issues one query and never raises. `resolve_with_fallback` walks
the fixed cascade and raises StrategiesExhaustedError when nothing matches.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from ..driver import Driver, ElementHandle
from .base import ToolError

logger = logging.getLogger("testgenius.tools.selectors")


class SelectorStrategy(str, Enum):
    CSS = "css"
    TEXT = "text"
    EXACT_TEXT = "exact-text"
    XPATH = "xpath"
    ID = "id"
    NAME = "name"

    @classmethod
    def parse(cls, raw: str | SelectorStrategy | None) -> SelectorStrategy:
        """Unknown or missing tags fall back to css."""
        if isinstance(raw, SelectorStrategy):
            return raw
        try:
            return cls((raw or "css").strip().lower())
        except ValueError:
            return cls.CSS


FALLBACK_ORDER: tuple[SelectorStrategy, ...] = (
    SelectorStrategy.TEXT,
    SelectorStrategy.XPATH,
    SelectorStrategy.CSS,
    SelectorStrategy.ID,
    SelectorStrategy.NAME,
)


class StrategiesExhaustedError(ToolError):
    """No strategy in the cascade produced an existing element."""


@dataclass(frozen=True)
class Resolution:
    handle: ElementHandle
    strategy: SelectorStrategy
    query: str


def build_query(raw: str, strategy: SelectorStrategy | str) -> str:
    strategy = SelectorStrategy.parse(strategy)
    if strategy is SelectorStrategy.XPATH:
        return f"xpath={raw}"
    if strategy is SelectorStrategy.ID:
        return f"#{raw}"
    if strategy is SelectorStrategy.NAME:
        return f'[name="{raw}"]'
    if strategy is SelectorStrategy.TEXT:
        return f"//*[contains(text(), '{raw}')]"
    if strategy is SelectorStrategy.EXACT_TEXT:
        return f"//*[text()='{raw}']"
    return raw


def resolve(driver: Driver, raw: str, strategy: SelectorStrategy | str) -> ElementHandle | None:
    """Query a single element; any driver error maps to None."""
    try:
        return driver.query(build_query(raw, strategy))
    except Exception as exc:  # noqa: BLE001
        logger.debug("query failed strategy=%s raw=%r: %s", strategy, raw, exc)
        return None


def handle_exists(handle: ElementHandle | None) -> bool:
    if handle is None:
        return False
    try:
        return bool(handle.exists())
    except Exception:  # noqa: BLE001
        return False


def fallback_sequence(requested: SelectorStrategy | str) -> list[SelectorStrategy]:
    """Requested strategy first, then the fixed cascade without repeats."""
    first = SelectorStrategy.parse(requested)
    return [first, *(s for s in FALLBACK_ORDER if s is not first)]


def resolve_with_fallback(driver: Driver, raw: str, requested: SelectorStrategy | str, *, tool: str) -> Resolution:
    for strategy in fallback_sequence(requested):
        handle = resolve(driver, raw, strategy)
        if handle_exists(handle):
            if strategy is not SelectorStrategy.parse(requested):
                logger.info("using fallback strategy: %s", strategy.value)
            return Resolution(handle=handle, strategy=strategy, query=build_query(raw, strategy))
    raise StrategiesExhaustedError(tool=tool, reason=f"Element not found using any strategy: {raw}")
