"""Figures shown on the plan poster: BMI, per-day calorie split, plan totals."""
from typing import Any, Dict, List

from nutrigen.domain.DietPlan import DayPlan, DietPlan
from nutrigen.utilities.constants import MEAL_SLOTS, MIN_CHART_PCT


def compute_bmi(weight_kg: float, height_cm: float) -> float:
    """Body mass index rounded to one decimal."""
    if height_cm <= 0:
        raise ValueError("height must be positive")
    return round(weight_kg / ((height_cm / 100) ** 2), 1)


def format_bmi(weight_kg: float, height_cm: float) -> str:
    return f"{compute_bmi(weight_kg, height_cm):.1f}"


def calorie_distribution(day: DayPlan) -> List[Dict[str, Any]]:
    """Bar segments for a day's calorie chart.

    Each segment is at least MIN_CHART_PCT wide so small meals stay visible;
    the snack segment only appears when it carries calories. Widths are taken
    against the reported day total, which is not reconciled with the meals.
    """
    total = day.total_calories
    segments = []
    for slot, short_label, long_label in MEAL_SLOTS:
        meal = getattr(day, slot)
        calories = meal.calories if meal is not None else 0
        if slot == "snack" and calories <= 0:
            continue
        pct = (calories / total) * 100 if total > 0 else 0
        segments.append({
            "slot": slot,
            "label": short_label,
            "title": long_label,
            "calories": calories,
            "pct": max(MIN_CHART_PCT, pct),
        })
    return segments


def plan_summary(plan: DietPlan) -> Dict[str, Any]:
    days = len(plan.days)
    total = sum(d.total_calories for d in plan.days)
    return {
        "days": days,
        "average_daily_calories": round(total / days) if days else 0,
        "shopping_items": len(plan.shopping_list),
    }


__all__ = ["compute_bmi", "format_bmi", "calorie_distribution", "plan_summary"]
