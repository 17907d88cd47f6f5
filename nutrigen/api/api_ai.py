import base64
import logging

from fastapi import APIRouter, BackgroundTasks, File, HTTPException, UploadFile
from fastapi.concurrency import run_in_threadpool

from nutrigen.api import session
from nutrigen.domain.UserProfile import UserProfile
from nutrigen.logic.analysis.food_analysis import analyze_food_image
from nutrigen.logic.planning.plan_builder import generate_diet_plan
from nutrigen.logic.workflow.plan_session import run_generation
from nutrigen.utilities.constants import ANALYSIS_FAILED_MESSAGE
from nutrigen.utilities.errors import MissingCredentialError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


# === Plan generation ===
@router.post("/plan")
def start_plan(profile: UserProfile, background_tasks: BackgroundTasks):
    """Start generating a plan for ``profile``; the client polls /api/plan/state."""
    workflow = session.workflow
    generation = workflow.begin(profile)
    background_tasks.add_task(run_generation, workflow, generation, profile, generate_diet_plan)
    return {"generation": generation, "step": workflow.step}


@router.get("/plan/state")
def plan_state():
    return session.workflow.snapshot()


@router.post("/plan/reset")
def reset_plan():
    session.workflow.reset()
    return session.workflow.snapshot()


# === Calorie camera ===
@router.post("/analyze-image")
async def analyze_image(image: UploadFile = File(...)):
    if image.content_type and not image.content_type.startswith("image/"):
        raise HTTPException(status_code=400, detail="Invalid image type")
    raw = await image.read()
    if not raw:
        raise HTTPException(status_code=400, detail="Empty image")
    encoded = base64.b64encode(raw).decode("ascii")

    try:
        analysis = await run_in_threadpool(analyze_food_image, encoded)
    except MissingCredentialError:
        logger.error("Food analysis requested without OPENAI_API_KEY")
        raise HTTPException(status_code=503, detail=ANALYSIS_FAILED_MESSAGE)
    except Exception:
        logger.exception("Food analysis failed")
        raise HTTPException(status_code=502, detail=ANALYSIS_FAILED_MESSAGE)
    return analysis.model_dump()
