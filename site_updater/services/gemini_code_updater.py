"""
File update service using Google Gemini
"""
import google.generativeai as genai
import time
from typing import Any, Optional

from site_updater.logging_config import logger
from site_updater.config import settings
from site_updater.models import CodeUpdateRequest, GeneratedCodeResult
from site_updater.services.errors import UpstreamError
from site_updater.services.llm_response_handler import LLMResponseHandler
from site_updater.services.prompts import build_update_prompt


class GeminiCodeUpdater:
    """Rewrites data.json, functions.php and index.php with one Gemini call"""

    def __init__(self, model: Optional[Any] = None, model_name: Optional[str] = None):
        """Initialize Gemini client"""
        self.model_name = model_name or settings.GEMINI_MODEL

        if model is None:
            if not settings.GEMINI_API_KEY:
                raise ValueError("GEMINI_API_KEY not configured")

            genai.configure(api_key=settings.GEMINI_API_KEY)
            model = genai.GenerativeModel(self.model_name)

        self.model = model

        logger.info(f"Initialized GeminiCodeUpdater with model: {self.model_name}")

    @staticmethod
    def generation_config() -> dict:
        return {
            "temperature": settings.TEMPERATURE,
            "top_p": settings.TOP_P,
            "top_k": settings.TOP_K,
            "max_output_tokens": settings.MAX_OUTPUT_TOKENS,
            "response_mime_type": "application/json",
        }

    async def update_files(self, request: CodeUpdateRequest) -> GeneratedCodeResult:
        """
        Ask Gemini for updated versions of the three files.

        Args:
            request: Task type, instructions and current file contents

        Returns:
            Updated files and call metadata

        Raises:
            CodeUpdateError: blocked generation, malformed answer or API failure
        """
        start_time = time.time()
        prompt = build_update_prompt(request)

        logger.info(
            "Calling Gemini API",
            model=self.model_name,
            task_type=request.task_type.value,
            prompt_length=len(prompt)
        )

        try:
            response = await self.model.generate_content_async(
                prompt,
                generation_config=self.generation_config()
            )
        except Exception as e:
            logger.error(f"Gemini API call failed: {str(e)}", exc_info=True)
            raise UpstreamError(str(e) or type(e).__name__) from e

        text = LLMResponseHandler.extract_text(response)
        files = LLMResponseHandler.parse_generated_files(text)

        execution_time = time.time() - start_time
        token_usage = self._token_usage(response)

        logger.info(
            "Files updated successfully",
            task_type=request.task_type.value,
            execution_time=execution_time,
            **token_usage
        )

        return GeneratedCodeResult(
            **files,
            model=self.model_name,
            execution_time=execution_time,
            token_usage=token_usage
        )

    @staticmethod
    def _token_usage(response: Any) -> dict:
        usage = getattr(response, "usage_metadata", None)
        return {
            "input_tokens": getattr(usage, "prompt_token_count", 0) or 0,
            "output_tokens": getattr(usage, "candidates_token_count", 0) or 0,
        }


_updater: Optional[GeminiCodeUpdater] = None


def get_code_updater() -> GeminiCodeUpdater:
    """FastAPI dependency returning the shared updater"""
    global _updater
    if _updater is None:
        _updater = GeminiCodeUpdater()
    return _updater
