from fastapi import FastAPI, Request, HTTPException, Response
from fastapi.responses import HTMLResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from datetime import datetime
from urllib.parse import quote
import logging

from nutrigen.api import session
from nutrigen.api.api_ai import router as ai_router
from nutrigen.api.routes import feedback, images
from nutrigen.domain.UserProfile import ActivityLevel, Gender, Goal
from nutrigen.infra.pdf_utils import generate_pdf_for_plan
from nutrigen.logic.reporting.nutrition import calorie_distribution, format_bmi, plan_summary
from nutrigen.logic.workflow.plan_session import STEP_GENERATING, STEP_RESULT
from nutrigen.utilities.config import DEBUG, STATIC_DIR, TEMPLATES_DIR
from nutrigen.utilities.constants import (
    BRAND_NAME, BROKEN_IMAGE, DEFAULT_PLAN_TITLE, DIET_NOTES, LOADING_IMAGE, MEAL_SLOTS,
    PLAN_FAILED_MESSAGE, PRINT_TITLE_RESTORE_MS
)
from nutrigen.utilities.formatting import format_number

# Logging
logger = logging.getLogger("nutrigen_app")

# Initialize FastAPI app
app = FastAPI(title="NutriGen AI Diet Poster", debug=DEBUG)

# Include routers
app.include_router(ai_router)
app.include_router(images.router)
app.include_router(feedback.router)

# Static files
app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

# Templates
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.filters["num"] = format_number


def _ts() -> int:
    """Cache-busting timestamp for static assets."""
    return int(datetime.now().timestamp())


# -------------------- Helpers --------------------
def _poster_days(plan, resolver):
    """Day cards with chart segments and a first-paint image for every meal row."""
    labels = {slot: short for slot, short, _ in MEAL_SLOTS}
    days = []
    for index, day in enumerate(plan.days):
        rows = []
        for slot, meal in day.meals():
            rows.append({
                "slot": slot,
                "label": labels[slot],
                "meal": meal,
                "image": resolver.peek_meal(meal),
            })
        days.append({
            "index": index + 1,
            "day": day,
            "segments": calorie_distribution(day),
            "rows": rows,
        })
    return days


# -------------------- UI PAGES --------------------
@app.get("/", response_class=HTMLResponse)
def main_page(request: Request):
    workflow = session.workflow
    state = workflow.snapshot()
    profile = workflow.profile
    context = {
        "request": request,
        "time": _ts(),
        "state": state,
        "profile": profile,
        "genders": list(Gender),
        "activities": list(ActivityLevel),
        "goals": list(Goal),
        "failed_message": PLAN_FAILED_MESSAGE,
    }

    if state["step"] == STEP_GENERATING:
        return templates.TemplateResponse(request, "generating.html", context)

    if state["step"] == STEP_RESULT and workflow.plan is not None:
        plan = workflow.plan
        context.update({
            "plan": plan,
            "plan_title": plan.title or DEFAULT_PLAN_TITLE,
            "bmi": format_bmi(profile.weight, profile.height),
            "days": _poster_days(plan, session.get_image_resolver()),
            "summary_stats": plan_summary(plan),
            "diet_notes": DIET_NOTES,
            "brand": BRAND_NAME,
            "loading_image": LOADING_IMAGE,
            "broken_image": BROKEN_IMAGE,
            "print_restore_ms": PRINT_TITLE_RESTORE_MS,
        })
        return templates.TemplateResponse(request, "plan.html", context)

    return templates.TemplateResponse(request, "index.html", context)


@app.get("/export_pdf")
def export_pdf():
    workflow = session.workflow
    plan = workflow.plan
    if workflow.step != STEP_RESULT or plan is None:
        raise HTTPException(status_code=404, detail="No plan generated yet")

    pdf_bytes = generate_pdf_for_plan(plan, workflow.profile)
    filename = f"{plan.title or DEFAULT_PLAN_TITLE}.pdf"
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={
            "Content-Disposition": f"attachment; filename=diet_plan.pdf; filename*=UTF-8''{quote(filename)}"
        },
    )
