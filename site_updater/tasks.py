"""
Task catalog and starter files for the updater page.
"""
from enum import Enum
from typing import Dict, List


class TaskType(str, Enum):
    """Kinds of update a user can ask for. Values are the display labels."""

    ADD_FAQ = "Add FAQ"
    UPDATE_SCHEMA = "Update Schema"
    UPDATE_BLOG = "Update Blog Content"


DEFAULT_TASK = TaskType.ADD_FAQ


TASK_DESCRIPTIONS: Dict[TaskType, str] = {
    TaskType.ADD_FAQ: "Add question and answer entries and render them on the page.",
    TaskType.UPDATE_SCHEMA: "Change structured data (JSON-LD) emitted by the page.",
    TaskType.UPDATE_BLOG: "Add or edit blog posts and the markup that lists them.",
}


TASK_GUIDANCE: Dict[TaskType, str] = {
    TaskType.ADD_FAQ: """Store FAQ entries in the "faq" array of data.json as objects with "question" and "answer" keys.
Add or reuse a helper in functions.php that returns the FAQ list from get_data().
Render every FAQ entry in index.php, escaping output with htmlspecialchars().
If the page has FAQPage structured data, keep it in sync with the new entries.""",
    TaskType.UPDATE_SCHEMA: """Keep structured data in data.json under a "schema" key unless the file already uses another key.
Add or reuse a helper in functions.php that builds the schema array and encodes it with json_encode().
Emit the schema in index.php inside <script type="application/ld+json"> in the <head>.
Follow schema.org vocabulary and keep existing properties the instructions do not mention.""",
    TaskType.UPDATE_BLOG: """Store blog posts in data.json under a "posts" array unless the file already uses another key.
Each post should carry at least "title", "slug", "date" and "content".
Add or reuse helpers in functions.php for listing and looking up posts.
Render the posts in index.php with semantic markup (<article>, <h2>, <time>), escaping output.""",
}


INITIAL_JSON = """{
  "faq": []
}"""

INITIAL_PHP_FUNCTIONS = """<?php
// functions.php
function get_data() {
    return json_decode(file_get_contents('data.json'), true);
}
"""

INITIAL_PHP_INDEX = """<?php
// index.php
require_once 'functions.php';
$data = get_data();
?>
<!DOCTYPE html>
<html>
<head><title>Page</title></head>
<body>
    <h1>Welcome</h1>
</body>
</html>
"""


def get_task(value: str) -> TaskType:
    """Resolve a display label ("Add FAQ") or member name ("add_faq")."""
    if isinstance(value, TaskType):
        return value

    candidate = (value or "").strip()
    for task in TaskType:
        if candidate == task.value or candidate.upper() == task.name:
            return task

    valid = ", ".join(task.name for task in TaskType)
    raise ValueError(f"Unknown task type '{value}'. Expected one of: {valid}")


def list_tasks() -> List[Dict[str, str]]:
    """Task catalog in declaration order"""
    return [
        {
            "id": task.name,
            "label": task.value,
            "description": TASK_DESCRIPTIONS[task],
        }
        for task in TaskType
    ]


def initial_files() -> Dict[str, str]:
    """Starter contents for the three editor panes"""
    return {
        "json_content": INITIAL_JSON,
        "functions_content": INITIAL_PHP_FUNCTIONS,
        "index_content": INITIAL_PHP_INDEX,
    }
