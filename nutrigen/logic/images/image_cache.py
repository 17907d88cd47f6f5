"""Meal illustration lookup with a persistent cache.

Each meal is identified by ``(name, calories)``. The first resolution fetches
a generated picture from the image endpoint (seeded with the calorie count so
the same meal always gets the same picture), converts it to a ``data:`` URI and
stores it; later resolutions are served from the store without any network
traffic. Failures never propagate: a rejected store write just skips caching,
and a failed fetch falls back to handing out the endpoint URL itself so the
browser can try on its own.
"""
from __future__ import annotations
import base64
import logging
from dataclasses import dataclass
from typing import Optional, Union
from urllib.parse import quote, urlencode

import httpx
from anyio import to_thread

from nutrigen.domain.DietPlan import Meal
from nutrigen.infra.Image_Store import ImageStore
from nutrigen.utilities.config import IMAGE_ENDPOINT, IMAGE_TIMEOUT
from nutrigen.utilities.constants import (
    IMAGE_CACHE_VERSION, IMAGE_MODEL, IMAGE_PROMPT_SUFFIX, IMAGE_SIZE, PLACEHOLDER_IMAGE
)
from nutrigen.utilities.errors import ImageStoreError
from nutrigen.utilities.formatting import format_number

logger = logging.getLogger(__name__)

Number = Union[int, float]

ORIGIN_PLACEHOLDER = "placeholder"
ORIGIN_CACHE = "cache"
ORIGIN_REMOTE = "remote"
ORIGIN_FALLBACK = "fallback"
ORIGIN_PENDING = "pending"


@dataclass(frozen=True)
class ImageResolution:
    src: str
    loading: bool = False
    origin: str = ORIGIN_PLACEHOLDER

    def to_dict(self):
        return {"src": self.src, "loading": self.loading, "origin": self.origin}


def cache_key(name: str, calories: Number) -> str:
    """Version tag + name + calories; bumping the tag orphans old entries."""
    return f"{IMAGE_CACHE_VERSION}_{name}_{format_number(calories)}"


def build_image_url(prompt: str, seed: Number, endpoint: str = IMAGE_ENDPOINT) -> str:
    encoded = quote(f"{prompt}{IMAGE_PROMPT_SUFFIX}", safe="!*'()")
    query = urlencode({
        "width": IMAGE_SIZE,
        "height": IMAGE_SIZE,
        "nologo": "true",
        "model": IMAGE_MODEL,
        "seed": format_number(seed),
    })
    return f"{endpoint}{encoded}?{query}"


def to_data_uri(content: bytes, content_type: Optional[str]) -> str:
    mime = (content_type or "image/jpeg").split(";")[0].strip() or "image/jpeg"
    return f"data:{mime};base64,{base64.b64encode(content).decode('ascii')}"


class MealImageResolver:
    def __init__(self, store: ImageStore, transport: Optional[httpx.AsyncBaseTransport] = None,
                 endpoint: str = IMAGE_ENDPOINT, timeout: Optional[float] = IMAGE_TIMEOUT):
        self.store = store
        self.endpoint = endpoint
        self.timeout = timeout
        self._transport = transport

    def peek(self, name: str, calories: Number, prompt: Optional[str]) -> ImageResolution:
        """Answer without touching the network; ``loading`` means resolve() is still needed."""
        if not prompt:
            return ImageResolution(PLACEHOLDER_IMAGE, loading=False, origin=ORIGIN_PLACEHOLDER)
        cached = self.store.get(cache_key(name, calories))
        if cached:
            return ImageResolution(cached, loading=False, origin=ORIGIN_CACHE)
        return ImageResolution("", loading=True, origin=ORIGIN_PENDING)

    async def resolve(self, name: str, calories: Number, prompt: Optional[str]) -> ImageResolution:
        if not prompt:
            return ImageResolution(PLACEHOLDER_IMAGE, loading=False, origin=ORIGIN_PLACEHOLDER)

        key = cache_key(name, calories)
        cached = await to_thread.run_sync(self.store.get, key)
        if cached:
            return ImageResolution(cached, loading=False, origin=ORIGIN_CACHE)

        url = build_image_url(prompt, calories, self.endpoint)
        try:
            payload = await self._fetch(url)
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Image fetch failed for %r, using direct URL fallback: %s", name, e)
            return ImageResolution(url, loading=False, origin=ORIGIN_FALLBACK)

        try:
            await to_thread.run_sync(self.store.put, key, payload)
        except ImageStoreError as e:
            logger.warning("Image store rejected %s, skipping cache: %s", key, e)
        return ImageResolution(payload, loading=False, origin=ORIGIN_REMOTE)

    async def _fetch(self, url: str) -> str:
        async with httpx.AsyncClient(transport=self._transport, timeout=self.timeout,
                                     follow_redirects=True) as client:
            response = await client.get(url)
            response.raise_for_status()
            if not response.content:
                raise ValueError("empty image body")
            return to_data_uri(response.content, response.headers.get("content-type"))

    def peek_meal(self, meal: Meal) -> ImageResolution:
        return self.peek(meal.name, meal.calories, meal.visual_prompt_en)

    async def resolve_meal(self, meal: Meal) -> ImageResolution:
        return await self.resolve(meal.name, meal.calories, meal.visual_prompt_en)


__all__ = [
    "ImageResolution", "MealImageResolver", "cache_key", "build_image_url", "to_data_uri",
    "ORIGIN_PLACEHOLDER", "ORIGIN_CACHE", "ORIGIN_REMOTE", "ORIGIN_FALLBACK", "ORIGIN_PENDING",
]
