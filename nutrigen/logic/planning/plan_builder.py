"""Plan request building: instruction text, output schema, parsing.

The output contract is enforced by handing a strict schema to the model;
locally we only guard against an empty answer and against payloads that do
not decode or validate.
"""
import json
import logging
import re
from json import JSONDecodeError
from typing import Any, Dict, Optional

from pydantic import ValidationError

from nutrigen.domain.DietPlan import DietPlan
from nutrigen.domain.UserProfile import UserProfile
from nutrigen.infra.Model_Client import ModelClient, get_model_client
from nutrigen.utilities.config import PLAN_TEMPERATURE
from nutrigen.utilities.constants import (
    EXCLUDED_LINE, PLAN_DAYS, PLAN_PROMPT_TEMPLATE, PREFERENCE_LINE
)
from nutrigen.utilities.errors import EmptyResponseError, MalformedResponseError
from nutrigen.utilities.formatting import format_number

logger = logging.getLogger(__name__)


# === Output schema ===
INGREDIENT_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "name": {"type": "string"},
        "amount": {"type": "string"},
    },
    "required": ["name", "amount"],
    "additionalProperties": False,
}

MEAL_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "name": {"type": "string"},
        "calories": {"type": "number"},
        "protein": {"type": "string"},
        "carbs": {"type": "string"},
        "fat": {"type": "string"},
        "ingredients": {"type": "array", "items": INGREDIENT_SCHEMA},
        "recipe_steps": {
            "type": "array",
            "items": {"type": "string"},
            "description": "简明扼要的烹饪步骤 (3-4步)，例如: '1. 鸡胸肉切丁焯水。2. 热锅少油炒香配料。'",
        },
        "visual_prompt_en": {
            "type": "string",
            "description": (
                "Single English keyword or short phrase for the main dish. "
                "E.g. 'Steamed corn and boiled egg', 'Beef dumplings'. Used for image generation."
            ),
        },
    },
    # strict mode wants every property listed
    "required": ["name", "calories", "protein", "carbs", "fat",
                 "ingredients", "recipe_steps", "visual_prompt_en"],
    "additionalProperties": False,
}

DAY_PLAN_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "day": {"type": "string", "description": "Day label, e.g., 'Day 1', '周一'"},
        "breakfast": MEAL_SCHEMA,
        "lunch": MEAL_SCHEMA,
        "dinner": MEAL_SCHEMA,
        "snack": {"anyOf": [MEAL_SCHEMA, {"type": "null"}]},
        "total_calories": {"type": "number"},
    },
    "required": ["day", "breakfast", "lunch", "dinner", "snack", "total_calories"],
    "additionalProperties": False,
}

DIET_PLAN_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "title": {
            "type": "string",
            "description": "食谱的大标题，例如 '25岁女性春季减脂食谱' 或 '高效增肌七日餐单'",
        },
        "summary": {"type": "string"},
        "days": {"type": "array", "items": DAY_PLAN_SCHEMA},
        "shopping_list": {"type": "array", "items": {"type": "string"}},
    },
    "required": ["title", "summary", "days", "shopping_list"],
    "additionalProperties": False,
}


# === Instruction ===
def build_plan_instruction(profile: UserProfile) -> str:
    """Return the instruction text for a profile. Identical profiles give identical text."""
    constraints = ""
    if profile.excluded_ingredients:
        constraints += EXCLUDED_LINE.format(value=profile.excluded_ingredients)
    if profile.dietary_preference:
        constraints += PREFERENCE_LINE.format(value=profile.dietary_preference)

    return PLAN_PROMPT_TEMPLATE.format(
        days=PLAN_DAYS,
        goal=profile.goal.value,
        gender=profile.gender.value,
        age=profile.age,
        height=format_number(profile.height),
        weight=format_number(profile.weight),
        activity=profile.activity.value,
        constraints=constraints,
    )


# === Parsing ===
def strip_code_fences(text: str) -> str:
    """Remove common markdown code fences and leading/trailing whitespace."""
    text = re.sub(r"```(?:json)?\n(.*?)```", r"\1", text, flags=re.S)
    text = re.sub(r"^```|```$", "", text.strip())
    return text.strip()


def parse_model_json(text: str, model_cls):
    """Decode ``text`` and validate it as ``model_cls``; raise MalformedResponseError otherwise."""
    try:
        data = json.loads(strip_code_fences(text))
    except JSONDecodeError as e:
        raise MalformedResponseError(f"Response is not valid JSON: {e}") from e
    try:
        return model_cls.model_validate(data)
    except ValidationError as e:
        raise MalformedResponseError(
            f"Response does not match {model_cls.__name__}: {e.error_count()} error(s)"
        ) from e


def parse_diet_plan(text: str) -> DietPlan:
    return parse_model_json(text, DietPlan)


# === Generation ===
def generate_diet_plan(profile: UserProfile, client: Optional[ModelClient] = None) -> DietPlan:
    """Ask the model for a plan matching ``profile``.

    Raises MissingCredentialError (before any network call) when no key is
    configured, EmptyResponseError when the model returns nothing and
    MalformedResponseError when the payload does not validate.
    """
    if client is None:
        client = get_model_client()

    instruction = build_plan_instruction(profile)
    text = client.submit(
        instruction,
        DIET_PLAN_SCHEMA,
        schema_name="diet_plan",
        temperature=PLAN_TEMPERATURE,
    )
    if not text or not text.strip():
        logger.warning("AI returned empty diet plan")
        raise EmptyResponseError("No response from AI")

    plan = parse_diet_plan(text)
    logger.info("Generated plan %r with %d day(s)", plan.title, len(plan.days))
    return plan


__all__ = [
    "DIET_PLAN_SCHEMA", "MEAL_SCHEMA", "build_plan_instruction", "strip_code_fences",
    "parse_model_json", "parse_diet_plan", "generate_diet_plan",
]
