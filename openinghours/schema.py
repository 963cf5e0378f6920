"""Pydantic models describing opening hours rules and their selectors."""

from __future__ import annotations

from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

MAX_HOUR = 48


class Month(str, Enum):
    """Calendar months with their opening hours abbreviations."""

    JAN = "Jan"
    FEB = "Feb"
    MAR = "Mar"
    APR = "Apr"
    MAY = "May"
    JUN = "Jun"
    JUL = "Jul"
    AUG = "Aug"
    SEP = "Sep"
    OCT = "Oct"
    NOV = "Nov"
    DEC = "Dec"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def get_value(cls, name: str) -> Optional["Month"]:
        """Return the month abbreviated as ``name`` or ``None``."""

        for month in cls:
            if month.value == name:
                return month
        return None

    @classmethod
    def name_values(cls) -> List[str]:
        return [month.value for month in cls]


class WeekDay(str, Enum):
    MO = "Mo"
    TU = "Tu"
    WE = "We"
    TH = "Th"
    FR = "Fr"
    SA = "Sa"
    SU = "Su"

    def __str__(self) -> str:
        return self.value


class HolidayType(str, Enum):
    PH = "PH"
    SH = "SH"

    def __str__(self) -> str:
        return self.value


class ModifierType(str, Enum):
    OPEN = "open"
    CLOSED = "closed"
    OFF = "off"
    UNKNOWN = "unknown"

    def __str__(self) -> str:
        return self.value


class CombinationKind(str, Enum):
    """How a rule combines with the previous non-empty rule."""

    NORMAL = "normal"
    ADDITIVE = "additive"
    FALLBACK = "fallback"


def _format_minutes(minutes: int) -> str:
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def _parse_time(value: Any) -> Any:
    if not isinstance(value, str):
        return value
    hours, sep, minutes = value.strip().partition(":")
    if not sep or not hours.isdigit() or not minutes.isdigit() or len(minutes) != 2:
        raise ValueError(f"Invalid time '{value}', expected HH:MM")
    if int(minutes) > 59:
        raise ValueError(f"Invalid minutes in time '{value}'")
    return int(hours) * 60 + int(minutes)


def _validate_comment(value: Optional[str]) -> Optional[str]:
    # Comments are rendered inside double quotes and cannot be escaped.
    if value is not None and '"' in value:
        raise ValueError("comments cannot contain double quotes")
    return value


class YearRange(BaseModel):
    """A single year, a range of years or an open ended ``2024+`` range."""

    model_config = ConfigDict(extra="forbid")
    start: int = Field(..., ge=1900)
    end: Optional[int] = Field(default=None, ge=1900)
    open_ended: bool = False

    @model_validator(mode="after")
    def _validate_bounds(self) -> "YearRange":
        if self.end is not None and self.open_ended:
            raise ValueError("an open ended year range cannot have an end year")
        return self

    def to_string(self) -> str:
        if self.end is not None:
            return f"{self.start}-{self.end}"
        return f"{self.start}+" if self.open_ended else str(self.start)


class WeekRange(BaseModel):
    """ISO week numbers, optionally stepped by ``interval``."""

    model_config = ConfigDict(extra="forbid")
    start: int = Field(..., ge=1, le=53)
    end: Optional[int] = Field(default=None, ge=1, le=53)
    interval: Optional[int] = Field(default=None, ge=1)

    @model_validator(mode="after")
    def _validate_interval(self) -> "WeekRange":
        if self.interval is not None and self.end is None:
            raise ValueError("a week interval requires an end week")
        return self

    def to_string(self) -> str:
        text = f"{self.start:02d}"
        if self.end is not None:
            text += f"-{self.end:02d}"
        if self.interval is not None:
            text += f"/{self.interval}"
        return text


class MonthRange(BaseModel):
    """Months or month days such as ``Jan-Mar`` or ``Dec 24``."""

    model_config = ConfigDict(extra="forbid")
    start: Month
    start_day: Optional[int] = Field(default=None, ge=1, le=31)
    end: Optional[Month] = None
    end_day: Optional[int] = Field(default=None, ge=1, le=31)

    @model_validator(mode="after")
    def _validate_end_day(self) -> "MonthRange":
        if self.end_day is not None and self.end is None:
            raise ValueError("end_day requires an end month")
        return self

    def to_string(self) -> str:
        text = str(self.start)
        if self.start_day is not None:
            text += f" {self.start_day:02d}"
        if self.end is not None:
            text += f"-{self.end}"
            if self.end_day is not None:
                text += f" {self.end_day:02d}"
        return text


class Holiday(BaseModel):
    """Public (``PH``) or school (``SH``) holidays with an optional day offset."""

    model_config = ConfigDict(extra="forbid")
    type: HolidayType
    offset: int = 0

    def to_string(self) -> str:
        if not self.offset:
            return str(self.type)
        unit = "day" if abs(self.offset) == 1 else "days"
        return f"{self.type} {self.offset:+d} {unit}"


class WeekDayRange(BaseModel):
    """A weekday, a weekday range or the nth weekday(s) of a month."""

    model_config = ConfigDict(extra="forbid")
    start: WeekDay
    end: Optional[WeekDay] = None
    nth: List[int] = Field(default_factory=list)

    @field_validator("nth")
    @classmethod
    def _validate_nth(cls, value: List[int]) -> List[int]:
        for index in value:
            if index == 0 or not -5 <= index <= 5:
                raise ValueError(f"nth weekday index {index} out of range")
        return value

    @model_validator(mode="after")
    def _validate_nth_without_end(self) -> "WeekDayRange":
        if self.nth and self.end is not None:
            raise ValueError("nth weekdays cannot be combined with a weekday range")
        return self

    def to_string(self) -> str:
        text = str(self.start)
        if self.end is not None:
            text += f"-{self.end}"
        if self.nth:
            text += "[" + ",".join(str(index) for index in self.nth) + "]"
        return text


class TimeSpan(BaseModel):
    """Time of day span in minutes since midnight.

    Times past midnight of the following day are expressed with hours up to
    ``MAX_HOUR`` (``22:00-26:00``), and ``open_ended`` renders as ``08:00+``.
    Both ``"HH:MM"`` strings and plain minute counts are accepted.
    """

    model_config = ConfigDict(extra="forbid")
    start: int = Field(..., ge=0, le=MAX_HOUR * 60)
    end: Optional[int] = Field(default=None, ge=0, le=MAX_HOUR * 60)
    open_ended: bool = False

    @field_validator("start", "end", mode="before")
    @classmethod
    def _coerce_time(cls, value: Any) -> Any:
        return _parse_time(value)

    def to_string(self) -> str:
        text = _format_minutes(self.start)
        if self.end is not None:
            text += f"-{_format_minutes(self.end)}"
        if self.open_ended:
            text += "+"
        return text


class RuleModifier(BaseModel):
    """Trailing ``open``/``closed``/``off``/``unknown`` state and comment."""

    model_config = ConfigDict(extra="forbid")
    modifier: Optional[ModifierType] = None
    comment: Optional[str] = None

    check_comment = field_validator("comment")(_validate_comment)

    @model_validator(mode="after")
    def _validate_not_blank(self) -> "RuleModifier":
        if self.modifier is None and self.comment is None:
            raise ValueError("a modifier needs a state, a comment or both")
        return self

    def to_string(self) -> str:
        parts = []
        if self.modifier is not None:
            parts.append(str(self.modifier))
        if self.comment is not None:
            parts.append(f'"{self.comment}"')
        return " ".join(parts)


class Rule(BaseModel):
    """One clause of an opening hours value.

    The ``kind`` describes how the rule combines with the previous non-empty
    rule of a sequence. Payloads may also use the boolean ``additive`` and
    ``fallback`` flags instead of ``kind``.
    """

    model_config = ConfigDict(extra="forbid")
    comment: Optional[str] = None
    twenty_four_seven: bool = False
    years: List[YearRange] = Field(default_factory=list)
    weeks: List[WeekRange] = Field(default_factory=list)
    months: List[MonthRange] = Field(default_factory=list)
    holidays: List[Holiday] = Field(default_factory=list)
    days: List[WeekDayRange] = Field(default_factory=list)
    times: List[TimeSpan] = Field(default_factory=list)
    modifier: Optional[RuleModifier] = None
    kind: CombinationKind = CombinationKind.NORMAL

    check_comment = field_validator("comment")(_validate_comment)

    @model_validator(mode="before")
    @classmethod
    def _combination_flags(cls, data: Any) -> Any:
        if not isinstance(data, dict) or ("additive" not in data and "fallback" not in data):
            return data
        data = dict(data)
        additive = bool(data.pop("additive", False))
        fallback = bool(data.pop("fallback", False))
        if additive and fallback:
            raise ValueError("a rule cannot be both additive and fallback")
        if "kind" in data and (additive or fallback):
            raise ValueError("use either 'kind' or the additive/fallback flags")
        if additive:
            data["kind"] = CombinationKind.ADDITIVE
        elif fallback:
            data["kind"] = CombinationKind.FALLBACK
        return data

    # ------------------------------------------------------------ combination
    def is_additive(self) -> bool:
        return self.kind is CombinationKind.ADDITIVE

    def is_fallback(self) -> bool:
        return self.kind is CombinationKind.FALLBACK

    def is_empty(self) -> bool:
        """Return ``True`` if the rule carries no selector, modifier or comment."""

        return not (
            self.comment is not None
            or self.twenty_four_seven
            or self.years
            or self.weeks
            or self.months
            or self.holidays
            or self.days
            or self.times
            or self.modifier is not None
        )

    def is_mergeable_with(self, other: object) -> bool:
        """Return ``True`` if ``other`` differs from this rule only in days and times."""

        if not isinstance(other, Rule):
            return False
        return self.model_dump(exclude={"days", "times"}) == other.model_dump(exclude={"days", "times"})

    def copy(self) -> "Rule":  # type: ignore[override]
        """Return an independent deep copy of this rule."""

        return self.model_copy(deep=True)

    # -------------------------------------------------------------- rendering
    def to_string(self) -> str:
        parts: List[str] = []
        if self.comment is not None:
            parts.append(f'"{self.comment}":')
        if self.twenty_four_seven:
            parts.append("24/7")
        if self.years:
            parts.append(",".join(year.to_string() for year in self.years))
        if self.weeks:
            parts.append("week " + ",".join(week.to_string() for week in self.weeks))
        if self.months:
            parts.append(",".join(month.to_string() for month in self.months))
        day_selectors = [holiday.to_string() for holiday in self.holidays]
        day_selectors.extend(day.to_string() for day in self.days)
        if day_selectors:
            parts.append(",".join(day_selectors))
        if self.times:
            parts.append(",".join(span.to_string() for span in self.times))
        if self.modifier is not None:
            parts.append(self.modifier.to_string())
        return " ".join(parts)

    def to_debug_string(self) -> str:
        fields: List[str] = []
        if self.kind is not CombinationKind.NORMAL:
            fields.append(f"kind={self.kind.value}")
        if self.comment is not None:
            fields.append(f'comment="{self.comment}"')
        if self.twenty_four_seven:
            fields.append("24/7")
        for label, selectors in (
            ("years", self.years),
            ("weeks", self.weeks),
            ("months", self.months),
            ("holidays", self.holidays),
            ("days", self.days),
            ("times", self.times),
        ):
            if selectors:
                fields.append(f"{label}=" + ",".join(item.to_string() for item in selectors))
        if self.modifier is not None:
            fields.append(f"modifier={self.modifier.to_string()}")
        return "Rule[" + " ".join(fields) + "]"

    def __str__(self) -> str:
        return self.to_string()


class Schedule(BaseModel):
    """A named sequence of rules, e.g. the hours of one facility."""

    model_config = ConfigDict(extra="forbid")
    name: str = Field(..., min_length=1)
    rules: List[Rule] = Field(default_factory=list)


__all__ = [
    "CombinationKind",
    "Holiday",
    "HolidayType",
    "ModifierType",
    "Month",
    "MonthRange",
    "Rule",
    "RuleModifier",
    "Schedule",
    "TimeSpan",
    "WeekDay",
    "WeekDayRange",
    "WeekRange",
    "YearRange",
]
