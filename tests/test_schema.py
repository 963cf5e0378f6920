import pytest
from pydantic import ValidationError

from openinghours.schema import (
    CombinationKind,
    Holiday,
    HolidayType,
    ModifierType,
    Month,
    MonthRange,
    Rule,
    RuleModifier,
    TimeSpan,
    WeekDay,
    WeekDayRange,
    WeekRange,
    YearRange,
)


def full_rule(**overrides) -> Rule:
    fields = dict(
        comment="summer",
        years=[YearRange(start=2024, end=2026)],
        weeks=[WeekRange(start=1, end=20, interval=2)],
        months=[MonthRange(start=Month.JUN, end=Month.AUG)],
        holidays=[Holiday(type=HolidayType.PH)],
        days=[WeekDayRange(start=WeekDay.MO, end=WeekDay.FR)],
        times=[TimeSpan(start="08:00", end="12:30"), TimeSpan(start="22:00", end="26:00")],
        modifier=RuleModifier(modifier=ModifierType.OPEN, comment="call first"),
    )
    fields.update(overrides)
    return Rule(**fields)


def test_full_rule_renders_selectors_in_grammar_order() -> None:
    assert full_rule().to_string() == (
        '"summer": 2024-2026 week 01-20/2 Jun-Aug PH,Mo-Fr 08:00-12:30,22:00-26:00 open "call first"'
    )


def test_debug_string_tags_each_selector_group() -> None:
    rule = full_rule(kind=CombinationKind.FALLBACK, comment=None, weeks=[], years=[])
    assert rule.to_debug_string() == (
        "Rule[kind=fallback months=Jun-Aug holidays=PH days=Mo-Fr "
        'times=08:00-12:30,22:00-26:00 modifier=open "call first"]'
    )


def test_selector_rendering_variants() -> None:
    assert YearRange(start=2024).to_string() == "2024"
    assert YearRange(start=2024, open_ended=True).to_string() == "2024+"
    assert WeekRange(start=5).to_string() == "05"
    assert MonthRange(start=Month.DEC, start_day=24).to_string() == "Dec 24"
    assert MonthRange(start=Month.DEC, start_day=24, end=Month.JAN, end_day=2).to_string() == "Dec 24-Jan 02"
    assert Holiday(type=HolidayType.SH, offset=1).to_string() == "SH +1 day"
    assert Holiday(type=HolidayType.PH, offset=-2).to_string() == "PH -2 days"
    assert WeekDayRange(start=WeekDay.SA, nth=[1, -1]).to_string() == "Sa[1,-1]"
    assert TimeSpan(start="18:00", open_ended=True).to_string() == "18:00+"
    assert TimeSpan(start=540, end=1020).to_string() == "09:00-17:00"
    assert RuleModifier(modifier=ModifierType.CLOSED).to_string() == "closed"
    assert RuleModifier(comment="by appointment").to_string() == '"by appointment"'
    assert Rule(twenty_four_seven=True).to_string() == "24/7"


def test_is_empty_considers_all_selectors() -> None:
    assert Rule().is_empty()
    assert Rule(kind=CombinationKind.ADDITIVE).is_empty()
    assert not Rule(twenty_four_seven=True).is_empty()
    assert not Rule(comment="note").is_empty()
    assert not Rule(modifier=RuleModifier(modifier=ModifierType.OFF)).is_empty()
    assert not Rule(holidays=[Holiday(type=HolidayType.PH)]).is_empty()


def test_mergeable_ignores_only_days_and_times() -> None:
    base = full_rule()
    other_days = full_rule(days=[WeekDayRange(start=WeekDay.SA)], times=[TimeSpan(start="10:00", end="14:00")])
    assert base.is_mergeable_with(other_days)
    assert other_days.is_mergeable_with(base)
    assert not base.is_mergeable_with(full_rule(kind=CombinationKind.ADDITIVE))
    assert not base.is_mergeable_with(full_rule(holidays=[]))
    assert not base.is_mergeable_with(full_rule(modifier=None))
    assert not base.is_mergeable_with(full_rule(comment="winter"))
    assert not base.is_mergeable_with("Mo-Fr 08:00-12:30")


def test_copy_is_independent() -> None:
    rule = full_rule()
    copied = rule.copy()
    assert copied == rule
    assert copied is not rule
    copied.times.clear()
    assert len(rule.times) == 2


def test_comments_with_double_quotes_are_rejected() -> None:
    with pytest.raises(ValidationError):
        Rule(comment='the "old" hours')
    with pytest.raises(ValidationError):
        RuleModifier(modifier=ModifierType.CLOSED, comment='"renovation"')
    assert Rule(comment="it's open").to_string() == '"it\'s open":'


def test_combination_flags_map_to_kind() -> None:
    assert Rule.model_validate({"additive": True}).is_additive()
    assert Rule.model_validate({"fallback": True}).is_fallback()
    normal = Rule.model_validate({"additive": False, "fallback": False})
    assert normal.kind is CombinationKind.NORMAL
    assert not normal.is_additive() and not normal.is_fallback()
    with pytest.raises(ValidationError):
        Rule.model_validate({"additive": True, "fallback": True})
    with pytest.raises(ValidationError):
        Rule.model_validate({"additive": True, "kind": "fallback"})


def test_rule_from_json_payload() -> None:
    rule = Rule.model_validate(
        {
            "days": [{"start": "Mo", "end": "Fr"}],
            "times": [{"start": "08:00", "end": "12:00"}],
            "kind": "additive",
        }
    )
    assert rule.is_additive()
    assert str(rule) == "Mo-Fr 08:00-12:00"


@pytest.mark.parametrize(
    "payload",
    [
        {"times": [{"start": "8"}]},
        {"times": [{"start": "08:75"}]},
        {"times": [{"start": "49:00"}]},
        {"weeks": [{"start": 54}]},
        {"weeks": [{"start": 1, "interval": 2}]},
        {"days": [{"start": "Mo", "nth": [0]}]},
        {"days": [{"start": "Mo", "end": "Fr", "nth": [1]}]},
        {"years": [{"start": 2024, "end": 2025, "open_ended": True}]},
        {"months": [{"start": "Jan", "end_day": 3}]},
        {"modifier": {}},
        {"unknown": 1},
    ],
)
def test_invalid_payloads_are_rejected(payload: dict) -> None:
    with pytest.raises(ValidationError):
        Rule.model_validate(payload)


def test_month_lookup() -> None:
    assert Month.get_value("Mar") is Month.MAR
    assert Month.get_value("March") is None
    assert Month.name_values()[:3] == ["Jan", "Feb", "Mar"]
    assert len(Month.name_values()) == 12
    assert str(Month.DEC) == "Dec"
