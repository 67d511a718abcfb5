"""
Single-page UI router
"""
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from site_updater.logging_config import logger
from site_updater.config import settings
from site_updater.routers.generate import EMPTY_INSTRUCTIONS_MESSAGE
from site_updater.tasks import DEFAULT_TASK, get_task, initial_files, list_tasks

router = APIRouter()

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


@router.get("/", response_class=HTMLResponse)
async def index(request: Request, task: Optional[str] = None):
    """Render the updater page, optionally preselecting a task."""
    selected = DEFAULT_TASK
    if task:
        try:
            selected = get_task(task)
        except ValueError:
            logger.info("Unknown task in query, using default", task=task)

    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "tasks": list_tasks(),
            "selected_task": {"id": selected.name, "label": selected.value},
            "files": initial_files(),
            "model_name": settings.GEMINI_MODEL,
            "empty_instructions_message": EMPTY_INSTRUCTIONS_MESSAGE,
        }
    )
