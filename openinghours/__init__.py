"""Grouping and rendering of opening hours rules."""

from .errors import RuleValidationError, ScheduleNotFoundError
from .loader import RuleRepository
from .logging_config import setup_logging
from .schema import (
    CombinationKind,
    Holiday,
    HolidayType,
    ModifierType,
    Month,
    MonthRange,
    Rule,
    RuleModifier,
    Schedule,
    TimeSpan,
    WeekDay,
    WeekDayRange,
    WeekRange,
    YearRange,
)
from .util import (
    RuleLike,
    copy_list,
    get_mergeable_rules,
    rules_to_opening_hours_debug_string,
    rules_to_opening_hours_string,
)

__all__ = [
    "CombinationKind",
    "Holiday",
    "HolidayType",
    "ModifierType",
    "Month",
    "MonthRange",
    "Rule",
    "RuleLike",
    "RuleModifier",
    "RuleRepository",
    "RuleValidationError",
    "Schedule",
    "ScheduleNotFoundError",
    "TimeSpan",
    "WeekDay",
    "WeekDayRange",
    "WeekRange",
    "YearRange",
    "copy_list",
    "get_mergeable_rules",
    "rules_to_opening_hours_debug_string",
    "rules_to_opening_hours_string",
    "setup_logging",
]
