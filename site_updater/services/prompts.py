"""
Prompt Builder

Builds the single prompt sent to Gemini: task guidance, the user's
instructions, the three current files and the JSON output contract.
"""

from site_updater.models import CodeUpdateRequest
from site_updater.tasks import TASK_GUIDANCE


OUTPUT_KEYS = ("updatedJson", "updatedFunctions", "updatedIndex")


BASE_PROMPT = """You are an expert PHP web developer maintaining a small site made of three files:
- data.json: the site's content as JSON
- functions.php: PHP helpers that read and shape data.json
- index.php: the page that requires functions.php and renders the content

You apply the user's requested change consistently across all three files."""


OUTPUT_RULES = """## OUTPUT FORMAT
Return ONLY a single JSON object with exactly these string keys:
{
  "updatedJson": "<complete new contents of data.json>",
  "updatedFunctions": "<complete new contents of functions.php>",
  "updatedIndex": "<complete new contents of index.php>"
}

RULES:
1. Each value is the COMPLETE file, never a diff or an excerpt
2. Return a file verbatim if the change does not touch it
3. data.json must stay valid JSON
4. Keep existing content, helpers and markup the instructions do not mention
5. No markdown code fences and no commentary outside the JSON object"""


def build_update_prompt(request: CodeUpdateRequest) -> str:
    """
    Build the update prompt for one request.

    Args:
        request: Task type, instructions and the three current files

    Returns:
        Complete prompt string
    """
    task = request.task_type
    prompt_parts = [
        BASE_PROMPT,
        f"## TASK: {task.value}\n{TASK_GUIDANCE[task]}",
        f"## INSTRUCTIONS\n{request.instructions.strip()}",
        _file_section("data.json", "json", request.json_content),
        _file_section("functions.php", "php", request.functions_content),
        _file_section("index.php", "php", request.index_content),
        OUTPUT_RULES,
    ]

    return "\n\n".join(prompt_parts)


def _file_section(file_name: str, language: str, content: str) -> str:
    body = content if content.strip() else "(empty file)"
    return f"## CURRENT {file_name}\n```{language}\n{body}\n```"
