from typing import Optional

from fastapi import APIRouter, Query

from nutrigen.api import session

router = APIRouter()


@router.get("/api/meal-image")
async def meal_image(name: str = Query(...), calories: float = Query(...),
                     prompt: Optional[str] = Query(default=None)):
    """Resolve the illustration for one meal card: cached payload, fresh fetch or fallback URL."""
    resolution = await session.get_image_resolver().resolve(name, calories, prompt)
    return resolution.to_dict()
