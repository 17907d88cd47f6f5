"""Process-wide objects shared by the web routes.

Routes reach these through the module (``session.workflow``) so tests can
swap them with monkeypatch.
"""
from typing import Optional

from nutrigen.infra.Image_Store import JsonImageStore
from nutrigen.infra.paths import IMAGE_CACHE_FILE
from nutrigen.logic.images.image_cache import MealImageResolver
from nutrigen.logic.workflow.plan_session import PlanWorkflow
from nutrigen.utilities.config import IMAGE_CACHE_MAX_BYTES

workflow = PlanWorkflow()
_resolver: Optional[MealImageResolver] = None


def get_image_resolver() -> MealImageResolver:
    global _resolver
    if _resolver is None:
        _resolver = MealImageResolver(JsonImageStore(IMAGE_CACHE_FILE, max_bytes=IMAGE_CACHE_MAX_BYTES))
    return _resolver


def set_image_resolver(resolver: Optional[MealImageResolver]) -> None:
    global _resolver
    _resolver = resolver


__all__ = ['workflow', 'get_image_resolver', 'set_image_resolver']
