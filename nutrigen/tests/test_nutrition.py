import pytest

from nutrigen.domain.DietPlan import DayPlan, DietPlan
from nutrigen.logic.reporting.nutrition import (
    calorie_distribution, compute_bmi, format_bmi, plan_summary
)

from plan_fixtures import make_day, plan_dict


def test_bmi_for_default_profile():
    # 55 / 1.62^2 = 20.957...
    assert compute_bmi(55, 162) == 21.0
    assert format_bmi(55, 162) == "21.0"


def test_bmi_keeps_one_decimal():
    assert format_bmi(70, 175) == "22.9"


def test_bmi_rejects_zero_height():
    with pytest.raises(ValueError):
        compute_bmi(55, 0)


def test_distribution_has_minimum_width_and_optional_snack():
    day = DayPlan.model_validate(make_day("Day 1"))
    segments = calorie_distribution(day)
    assert [s["label"] for s in segments] == ["早", "午", "晚", "加"]
    assert segments[1]["pct"] == pytest.approx(550 / 1450 * 100)
    assert all(s["pct"] >= 5 for s in segments)

    no_snack = DayPlan.model_validate(make_day("Day 2", snack=False))
    assert [s["slot"] for s in calorie_distribution(no_snack)] == ["breakfast", "lunch", "dinner"]


def test_tiny_meal_is_padded_to_five_percent():
    data = make_day("Day 1")
    data["snack"]["calories"] = 10
    segments = calorie_distribution(DayPlan.model_validate(data))
    assert segments[-1]["pct"] == 5


def test_zero_total_uses_minimum_width():
    data = make_day("Day 1")
    data["total_calories"] = 0
    assert {s["pct"] for s in calorie_distribution(DayPlan.model_validate(data))} == {5}


def test_plan_summary():
    summary = plan_summary(DietPlan.model_validate(plan_dict()))
    assert summary == {"days": 7, "average_daily_calories": 1450, "shopping_items": 3}
