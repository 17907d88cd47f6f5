"""FoodAnalysis domain entity: calorie estimate for one photographed dish."""
from pydantic import BaseModel


class FoodAnalysis(BaseModel):
    food_name: str
    calories: float
    protein: float = 0
    carbs: float = 0
    fat: float = 0
    health_score: float  # nominally 0-10, passed through unclamped
    advice: str
