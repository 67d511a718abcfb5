"""
Code update API router
"""
from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel
from typing import Optional, List
import time

from slowapi import Limiter
from slowapi.util import get_remote_address

from site_updater.logging_config import logger
from site_updater.config import settings
from site_updater.models import CodeUpdateRequest
from site_updater.services.errors import CodeUpdateError
from site_updater.services.gemini_code_updater import GeminiCodeUpdater, get_code_updater
from site_updater.tasks import DEFAULT_TASK, get_task, initial_files, list_tasks

router = APIRouter()
limiter = Limiter(key_func=get_remote_address, enabled=settings.RATE_LIMIT_ENABLED)

EMPTY_INSTRUCTIONS_MESSAGE = "Please provide instructions before generating code."
GENERIC_FAILURE_MESSAGE = "Failed to generate code. Please check your API key and try again."


class GenerateRequest(BaseModel):
    """Request model for generating updated files"""
    task_type: str = DEFAULT_TASK.name
    instructions: str = ""
    json_content: str = ""
    functions_content: str = ""
    index_content: str = ""


class GenerateResponse(BaseModel):
    """Response model for generated files"""
    success: bool
    updated_json: Optional[str] = None
    updated_functions: Optional[str] = None
    updated_index: Optional[str] = None
    task_type: Optional[str] = None
    model: Optional[str] = None
    execution_time: Optional[float] = None
    token_usage: Optional[dict] = None


class TaskInfo(BaseModel):
    """Task information model"""
    id: str
    label: str
    description: str


class TasksResponse(BaseModel):
    """Response model for task catalog"""
    success: bool
    tasks: List[TaskInfo]
    default_task: str


class DefaultsResponse(BaseModel):
    """Starter contents for the three files"""
    json_content: str
    functions_content: str
    index_content: str


@router.get("/tasks", response_model=TasksResponse)
async def get_tasks():
    """Get the list of supported update tasks."""
    return TasksResponse(
        success=True,
        tasks=[TaskInfo(**t) for t in list_tasks()],
        default_task=DEFAULT_TASK.name
    )


@router.get("/defaults", response_model=DefaultsResponse)
async def get_defaults():
    """Get the starter data.json, functions.php and index.php."""
    return DefaultsResponse(**initial_files())


@router.post("/generate", response_model=GenerateResponse)
@limiter.limit(settings.GENERATE_RATE_LIMIT)
async def generate_updates(
    request: Request,
    data: GenerateRequest,
    updater: GeminiCodeUpdater = Depends(get_code_updater)
):
    """
    Generate updated versions of the three files.

    This endpoint:
    1. Rejects empty instructions without calling the model
    2. Sends the task, instructions and all three files to Gemini
    3. Returns the complete updated data.json, functions.php and index.php

    Any failure while generating is returned as a 502 whose detail is the
    message to show the user.
    """
    if not data.instructions.strip():
        raise HTTPException(status_code=400, detail=EMPTY_INSTRUCTIONS_MESSAGE)

    try:
        task_type = get_task(data.task_type)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    start_time = time.time()
    logger.info(
        "Code update request received",
        task_type=task_type.value,
        instructions_length=len(data.instructions)
    )

    try:
        result = await updater.update_files(
            CodeUpdateRequest(
                task_type=task_type,
                instructions=data.instructions,
                json_content=data.json_content,
                functions_content=data.functions_content,
                index_content=data.index_content
            )
        )
    except CodeUpdateError as e:
        logger.warning(f"Code update failed: {str(e)}", task_type=task_type.value)
        raise HTTPException(status_code=502, detail=str(e) or GENERIC_FAILURE_MESSAGE)
    except Exception as e:
        logger.error(f"Error generating code: {str(e)}", exc_info=True)
        raise HTTPException(status_code=502, detail=str(e) or GENERIC_FAILURE_MESSAGE)

    logger.info(
        "Code update completed",
        task_type=task_type.value,
        execution_time=time.time() - start_time
    )

    return GenerateResponse(
        success=True,
        updated_json=result.updated_json,
        updated_functions=result.updated_functions,
        updated_index=result.updated_index,
        task_type=task_type.value,
        model=result.model,
        execution_time=result.execution_time,
        token_usage=result.token_usage
    )
