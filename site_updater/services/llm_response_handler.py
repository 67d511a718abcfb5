"""
LLM Response Handler - Pull the generated files out of a Gemini response
"""

import json
import re
from typing import Any, Dict

from site_updater.logging_config import logger
from site_updater.services.errors import GenerationBlockedError, ResponseFormatError


# camelCase keys we ask for, plus the snake_case spelling models sometimes use
RESULT_KEYS = {
    "updated_json": ("updatedJson", "updated_json"),
    "updated_functions": ("updatedFunctions", "updated_functions"),
    "updated_index": ("updatedIndex", "updated_index"),
}

_FENCE_RE = re.compile(r"^```[\w+-]*[ \t]*\n?(.*?)\n?```$", re.DOTALL)


class LLMResponseHandler:
    """
    Handle Gemini responses: text extraction, fence stripping, JSON parsing
    """

    @staticmethod
    def extract_text(response: Any) -> str:
        """
        Get the text of a generate_content response.

        Raises:
            GenerationBlockedError: no candidates or no content parts
        """
        candidates = getattr(response, "candidates", None)
        if not candidates or not candidates[0].content.parts:
            finish_reason = candidates[0].finish_reason if candidates else "Unknown"
            prompt_feedback = getattr(response, "prompt_feedback", None)
            if not candidates and prompt_feedback is not None:
                block_reason = getattr(prompt_feedback, "block_reason", None)
                if block_reason:
                    finish_reason = block_reason
            logger.error(f"Gemini returned no content. Finish reason: {finish_reason}")
            raise GenerationBlockedError(getattr(finish_reason, "name", finish_reason))

        return "".join(
            part.text for part in candidates[0].content.parts
            if getattr(part, "text", None)
        )

    @staticmethod
    def clean_code_block(text: str) -> str:
        """Clean text content - remove one surrounding markdown code block if present"""
        text = (text or "").strip()

        match = _FENCE_RE.match(text)
        if match:
            return match.group(1).strip()

        return text

    @staticmethod
    def parse_generated_files(text: str) -> Dict[str, str]:
        """
        Parse the model's JSON answer into the three file contents.

        Args:
            text: Raw response text, optionally wrapped in a code fence

        Returns:
            Dict with updated_json, updated_functions and updated_index

        Raises:
            ResponseFormatError: not JSON, or keys missing / not strings
        """
        json_text = LLMResponseHandler.clean_code_block(text)
        if not json_text:
            raise ResponseFormatError("Empty response from AI")

        try:
            payload = json.loads(json_text)
        except json.JSONDecodeError as e:
            # Prose around the object: decode the first complete object only
            start = json_text.find("{")
            if start == -1:
                raise ResponseFormatError(f"Invalid JSON response from AI: {e}") from e
            try:
                payload, _ = json.JSONDecoder().raw_decode(json_text, start)
                logger.warning("Recovered JSON object from surrounding text")
            except json.JSONDecodeError as inner:
                logger.error(f"Failed to parse JSON response: {inner}")
                logger.error(f"Raw response (first 500 chars): {text[:500]}")
                raise ResponseFormatError(f"Invalid JSON response from AI: {inner}") from inner

        if not isinstance(payload, dict):
            raise ResponseFormatError("AI response is not a JSON object")

        files = {}
        missing = []
        for field, aliases in RESULT_KEYS.items():
            value = next(
                (payload[key] for key in aliases if payload.get(key) is not None), None
            )
            if value is None:
                missing.append(aliases[0])
            elif not isinstance(value, str):
                raise ResponseFormatError(f"AI response field '{aliases[0]}' is not a string")
            else:
                files[field] = value

        if missing:
            raise ResponseFormatError(
                f"AI response missing required fields: {', '.join(missing)}"
            )

        logger.info("Parsed generated files", sizes={k: len(v) for k, v in files.items()})
        return files
