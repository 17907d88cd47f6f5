"""UserProfile domain entity: biometric input for one plan request."""
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Gender(str, Enum):
    MALE = "男"
    FEMALE = "女"


class Goal(str, Enum):
    LOSE_WEIGHT = "减脂"
    MAINTAIN = "维持"
    GAIN_MUSCLE = "增肌"


class ActivityLevel(str, Enum):
    SEDENTARY = "久坐不动"
    LIGHT = "轻度活动 (每周1-3次运动)"
    MODERATE = "中度活动 (每周3-5次运动)"
    ACTIVE = "重度活动 (每周6-7次运动)"


class UserProfile(BaseModel):
    """Immutable per request; free-text fields may be empty."""
    model_config = ConfigDict(frozen=True)

    gender: Gender = Gender.FEMALE
    age: int = Field(28, ge=1, le=120)
    height: float = Field(162, gt=0, le=300)   # cm
    weight: float = Field(55, gt=0, le=500)    # kg
    activity: ActivityLevel = ActivityLevel.SEDENTARY
    goal: Goal = Goal.LOSE_WEIGHT
    excluded_ingredients: str = Field("", max_length=500)
    dietary_preference: str = Field("", max_length=500)

    @field_validator('excluded_ingredients', 'dietary_preference')
    @classmethod
    def strip_whitespace(cls, v):
        """Remove leading/trailing whitespace."""
        if isinstance(v, str):
            return v.strip()
        return v

    @property
    def has_preferences(self) -> bool:
        return bool(self.excluded_ingredients or self.dietary_preference)


DEFAULT_PROFILE = UserProfile()

__all__ = ["Gender", "Goal", "ActivityLevel", "UserProfile", "DEFAULT_PROFILE"]
