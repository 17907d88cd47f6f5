import json
import logging
from datetime import datetime

from fastapi import APIRouter
from pydantic import BaseModel, Field, field_validator

from nutrigen.infra.paths import FEEDBACK_FILE

router = APIRouter()
logger = logging.getLogger(__name__)


class FeedbackInput(BaseModel):
    """Schema for a feedback message from the poster page."""
    message: str = Field(..., min_length=1, max_length=2000)

    @field_validator('message')
    @classmethod
    def validate_message(cls, v):
        if not v.strip():
            raise ValueError('Feedback cannot be empty')
        return v.strip()


def _load_feedback():
    if FEEDBACK_FILE.exists():
        try:
            with open(FEEDBACK_FILE, encoding='utf-8') as f:
                data = json.load(f)
            if isinstance(data, list):
                return data
        except Exception as e:
            logger.error("Failed to load feedback: %s", e)
    return []


def _save_feedback(entries):
    FEEDBACK_FILE.parent.mkdir(parents=True, exist_ok=True)
    with open(FEEDBACK_FILE, 'w', encoding='utf-8') as f:
        json.dump(entries, f, ensure_ascii=False, indent=2)


@router.post('/api/feedback')
def submit_feedback(payload: FeedbackInput):
    entries = _load_feedback()
    entries.append({'message': payload.message, 'ts': datetime.now().isoformat(timespec='seconds')})
    _save_feedback(entries)
    logger.info("Feedback received (%d total)", len(entries))
    return {'status': 'ok', 'count': len(entries)}
