"""
Field heuristics for fill targets described loosely ("email", "password").

Candidate order is part of the tool contract and must stay fixed:

    email:    input[type="email"], input[name*="email"], input[placeholder*="email"],
              #email, .email-input, <original selector>
    password: input[type="password"], input[name*="password"], input[placeholder*="password"],
              #password, .password-input, <original selector>
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..driver import Driver, ElementHandle
from .selectors import handle_exists

logger = logging.getLogger("testgenius.tools.heuristics")


@dataclass(frozen=True)
class FieldHeuristic:
    """Ordered candidate selectors tried when `keyword` occurs in the target."""

    name: str
    keyword: str
    candidates: tuple[str, ...]

    def applies(self, selector: str) -> bool:
        return self.keyword in selector

    def candidate_list(self, selector: str) -> list[str]:
        return [*self.candidates, selector]

    def match(self, driver: Driver, selector: str) -> tuple[str, ElementHandle] | None:
        """First existing candidate wins; query errors skip the candidate."""
        for candidate in self.candidate_list(selector):
            try:
                handle = driver.query(candidate)
            except Exception:  # noqa: BLE001
                continue
            if handle_exists(handle):
                logger.info("found %s field using selector: %s", self.name, candidate)
                return candidate, handle
        return None


EMAIL_FIELD = FieldHeuristic(
    name="email",
    keyword="email",
    candidates=(
        'input[type="email"]',
        'input[name*="email"]',
        'input[placeholder*="email"]',
        "#email",
        ".email-input",
    ),
)

PASSWORD_FIELD = FieldHeuristic(
    name="password",
    keyword="password",
    candidates=(
        'input[type="password"]',
        'input[name*="password"]',
        'input[placeholder*="password"]',
        "#password",
        ".password-input",
    ),
)

# Checked in order; only the first heuristic whose keyword occurs is used.
FIELD_HEURISTICS: tuple[FieldHeuristic, ...] = (EMAIL_FIELD, PASSWORD_FIELD)


def pick_heuristic(selector: str) -> FieldHeuristic | None:
    return next((h for h in FIELD_HEURISTICS if h.applies(selector)), None)
