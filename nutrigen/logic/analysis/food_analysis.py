"""Calorie estimation for a photographed dish."""
import logging
from typing import Any, Dict, Optional

from nutrigen.domain.FoodAnalysis import FoodAnalysis
from nutrigen.infra.Model_Client import ModelClient, get_model_client
from nutrigen.logic.planning.plan_builder import parse_model_json
from nutrigen.utilities.constants import FOOD_ANALYSIS_PROMPT
from nutrigen.utilities.errors import EmptyResponseError

logger = logging.getLogger(__name__)

FOOD_ANALYSIS_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "food_name": {"type": "string"},
        "calories": {"type": "number"},
        "protein": {"type": "number"},
        "carbs": {"type": "number"},
        "fat": {"type": "number"},
        "health_score": {"type": "number"},
        "advice": {"type": "string"},
    },
    "required": ["food_name", "calories", "protein", "carbs", "fat", "health_score", "advice"],
    "additionalProperties": False,
}


def strip_data_uri(encoded: str) -> str:
    """Drop a ``data:...;base64,`` prefix, keeping the raw base64 payload."""
    parts = encoded.split(",")
    if len(parts) > 1 and parts[1]:
        return parts[1]
    return encoded


def parse_food_analysis(text: str) -> FoodAnalysis:
    return parse_model_json(text, FoodAnalysis)


def analyze_food_image(encoded_image: str, client: Optional[ModelClient] = None) -> FoodAnalysis:
    """Estimate name, calories and macros of the dish in a base64 (or data URI) JPEG."""
    if client is None:
        client = get_model_client()

    text = client.submit(
        FOOD_ANALYSIS_PROMPT,
        FOOD_ANALYSIS_SCHEMA,
        schema_name="food_analysis",
        image_base64=strip_data_uri(encoded_image),
    )
    if not text or not text.strip():
        logger.warning("AI returned empty food analysis")
        raise EmptyResponseError("Analysis failed")
    return parse_food_analysis(text)


__all__ = ["FOOD_ANALYSIS_SCHEMA", "strip_data_uri", "parse_food_analysis", "analyze_food_image"]
