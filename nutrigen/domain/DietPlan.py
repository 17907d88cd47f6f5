"""Diet plan domain entities: ingredients, meals, day plans and the full plan.

The model produces these wholesale; once validated they are treated as
opaque data. A day's ``total_calories`` is kept as returned and is never
reconciled with the sum of its meals.
"""
from typing import List, Optional

from pydantic import BaseModel


class Ingredient(BaseModel):
    name: str
    amount: str  # e.g. "50g", "1个"


class Meal(BaseModel):
    name: str
    calories: float
    protein: str = ""
    carbs: str = ""
    fat: str = ""
    ingredients: List[Ingredient]
    recipe_steps: List[str]
    visual_prompt_en: str  # English description, only used for image generation

    @property
    def ingredients_text(self) -> str:
        return "、".join(f"{i.name}{i.amount}" for i in self.ingredients)


class DayPlan(BaseModel):
    day: str  # "周一", "Day 1"...
    breakfast: Meal
    lunch: Meal
    dinner: Meal
    snack: Optional[Meal] = None
    total_calories: float

    def meals(self):
        """Yield (slot, meal) pairs in serving order, skipping an absent snack."""
        for slot in ("breakfast", "lunch", "dinner", "snack"):
            meal = getattr(self, slot)
            if meal is not None:
                yield slot, meal


class DietPlan(BaseModel):
    title: str
    summary: str
    days: List[DayPlan]
    shopping_list: List[str]


__all__ = ["Ingredient", "Meal", "DayPlan", "DietPlan"]
