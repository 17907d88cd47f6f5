"""Narrow interface to the hosted generative model.

Callers depend only on ``ModelClient.submit(instruction, schema, ...)``, which
returns the raw response text (or None when the model sent nothing). Tests
substitute a stub; production uses the OpenAI Responses API with a strict
JSON-schema output format.
"""
from __future__ import annotations
import logging
from typing import Any, Dict, Optional, Protocol

from openai import OpenAI

from nutrigen.utilities.config import MODEL_NAME, get_api_key
from nutrigen.utilities.constants import IMAGE_MIME_TYPE
from nutrigen.utilities.errors import MissingCredentialError

logger = logging.getLogger(__name__)


class ModelClient(Protocol):
    def submit(self, instruction: str, schema: Dict[str, Any], *, schema_name: str,
               temperature: Optional[float] = None,
               image_base64: Optional[str] = None) -> Optional[str]:
        ...


class OpenAIModelClient:
    def __init__(self, api_key: str, model: str = MODEL_NAME):
        self.model = model
        self._client = OpenAI(api_key=api_key)

    def submit(self, instruction: str, schema: Dict[str, Any], *, schema_name: str,
               temperature: Optional[float] = None,
               image_base64: Optional[str] = None) -> Optional[str]:
        content = []
        if image_base64:
            content.append({
                "type": "input_image",
                "image_url": f"data:{IMAGE_MIME_TYPE};base64,{image_base64}",
            })
        content.append({"type": "input_text", "text": instruction})

        kwargs: Dict[str, Any] = {}
        if temperature is not None:
            kwargs["temperature"] = temperature

        logger.info("Submitting %s request to %s", schema_name, self.model)
        response = self._client.responses.create(
            model=self.model,
            input=[{"role": "user", "content": content}],
            text={
                "format": {
                    "type": "json_schema",
                    "name": schema_name,
                    "schema": schema,
                    "strict": True,
                }
            },
            **kwargs,
        )
        return response.output_text


def get_model_client() -> OpenAIModelClient:
    """Return an OpenAI-backed client, or raise if OPENAI_API_KEY is not set."""
    api_key = get_api_key()
    if not api_key:
        logger.warning("OPENAI_API_KEY not set, cannot call the model.")
        raise MissingCredentialError("API Key not found")
    return OpenAIModelClient(api_key)


__all__ = ['ModelClient', 'OpenAIModelClient', 'get_model_client']
