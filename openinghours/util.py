"""Grouping and rendering helpers for sequences of opening hours rules."""

from __future__ import annotations

import logging
from typing import Callable, Iterable, List, Optional, Protocol, TypeVar

LOGGER = logging.getLogger(__name__)

ADDITIVE_SEPARATOR = ", "
FALLBACK_SEPARATOR = " || "
NORMAL_SEPARATOR = "; "


class RuleLike(Protocol):
    """Operations the grouping and rendering helpers need from a rule."""

    def is_empty(self) -> bool:  # pragma: no cover - protocol
        ...

    def is_additive(self) -> bool:  # pragma: no cover - protocol
        ...

    def is_fallback(self) -> bool:  # pragma: no cover - protocol
        ...

    def is_mergeable_with(self, other: object) -> bool:  # pragma: no cover - protocol
        ...

    def to_string(self) -> str:  # pragma: no cover - protocol
        ...

    def to_debug_string(self) -> str:  # pragma: no cover - protocol
        ...

    def copy(self) -> "RuleLike":  # pragma: no cover - protocol
        ...


RuleT = TypeVar("RuleT", bound=RuleLike)


def _require_rules(rules: object) -> None:
    if rules is None:
        raise TypeError("expected a sequence of rules, got None")


def get_mergeable_rules(rules: Iterable[RuleT]) -> List[List[RuleT]]:
    """Group rules that only differ in their day and time selectors.

    Each rule joins the first group whose founding member it is mergeable
    with, otherwise it starts a new group. Membership is only ever tested
    against ``group[0]``, so a non-transitive mergeability relation can place
    two mutually incompatible rules in the same group.
    """

    _require_rules(rules)
    groups: List[List[RuleT]] = []
    for rule in rules:
        for group in groups:
            if rule.is_mergeable_with(group[0]):
                group.append(rule)
                break
        else:
            groups.append([rule])
    LOGGER.debug("Grouped rules into %d mergeable group(s)", len(groups))
    return groups


def separator_for(rule: RuleLike) -> str:
    """Return the separator placed in front of ``rule`` when it is not first."""

    if rule.is_additive():
        return ADDITIVE_SEPARATOR
    if rule.is_fallback():
        return FALLBACK_SEPARATOR
    return NORMAL_SEPARATOR


def _join_rules(rules: Iterable[RuleLike], render: Callable[[RuleLike], str]) -> str:
    _require_rules(rules)
    parts: List[str] = []
    first = True
    for rule in rules:
        if rule.is_empty():
            continue
        if first:
            first = False
        else:
            parts.append(separator_for(rule))
        parts.append(render(rule))
    return "".join(parts)


def rules_to_opening_hours_string(rules: Iterable[RuleLike]) -> str:
    """Render ``rules`` as an opening hours value, skipping empty rules."""

    return _join_rules(rules, lambda rule: rule.to_string())


def rules_to_opening_hours_debug_string(rules: Iterable[RuleLike]) -> str:
    """Render ``rules`` like :func:`rules_to_opening_hours_string` using debug output."""

    return _join_rules(rules, lambda rule: rule.to_debug_string())


def copy_list(rules: Optional[Iterable[RuleT]]) -> Optional[List[RuleT]]:
    """Return a new list holding a copy of every rule, or ``None`` for ``None``."""

    if rules is None:
        return None
    return [rule.copy() for rule in rules]  # type: ignore[misc]


__all__ = [
    "ADDITIVE_SEPARATOR",
    "FALLBACK_SEPARATOR",
    "NORMAL_SEPARATOR",
    "RuleLike",
    "copy_list",
    "get_mergeable_rules",
    "rules_to_opening_hours_debug_string",
    "rules_to_opening_hours_string",
    "separator_for",
]
