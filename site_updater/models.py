"""
Data models shared by the updater service and API
"""
from pydantic import BaseModel
from typing import Optional

from site_updater.tasks import TaskType, DEFAULT_TASK


class CodeUpdateRequest(BaseModel):
    """Everything the model needs to rewrite the three files"""
    task_type: TaskType = DEFAULT_TASK
    instructions: str
    json_content: str = ""
    functions_content: str = ""
    index_content: str = ""


class GeneratedCodeResult(BaseModel):
    """Updated file contents returned by the model"""
    updated_json: str
    updated_functions: str
    updated_index: str
    model: Optional[str] = None
    execution_time: Optional[float] = None
    token_usage: Optional[dict] = None
