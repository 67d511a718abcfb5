"""Pytest configuration and shared fixtures."""

import json
import os
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

# Settings are read at import time
os.environ.setdefault("GEMINI_API_KEY", "test-key")
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ.setdefault("ENVIRONMENT", "development")


def make_response(text=None, finish_reason="STOP", candidates=True,
                  prompt_tokens=120, output_tokens=340):
    """Build an object shaped like a generate_content response."""
    if not candidates:
        return SimpleNamespace(candidates=[], prompt_feedback=None, usage_metadata=None)

    parts = [SimpleNamespace(text=text)] if text is not None else []
    candidate = SimpleNamespace(
        content=SimpleNamespace(parts=parts),
        finish_reason=finish_reason,
    )
    return SimpleNamespace(
        candidates=[candidate],
        usage_metadata=SimpleNamespace(
            prompt_token_count=prompt_tokens,
            candidates_token_count=output_tokens,
        ),
    )


@pytest.fixture
def generated_files():
    """A well-formed model answer."""
    return {
        "updatedJson": '{\n  "faq": [\n    {"question": "Return Policy?", "answer": "30 days."}\n  ]\n}',
        "updatedFunctions": "<?php\nfunction get_faq() {\n    return get_data()['faq'];\n}\n",
        "updatedIndex": "<?php require_once 'functions.php'; ?>\n<h1>FAQ</h1>\n",
    }


@pytest.fixture
def mock_model(generated_files):
    """Mock GenerativeModel returning the well-formed answer."""
    model = MagicMock()
    model.generate_content_async = AsyncMock(
        return_value=make_response(json.dumps(generated_files))
    )
    return model


@pytest.fixture
def updater(mock_model):
    from site_updater.services.gemini_code_updater import GeminiCodeUpdater

    return GeminiCodeUpdater(model=mock_model, model_name="gemini-test")


@pytest.fixture
def client(updater):
    """TestClient with the Gemini updater replaced by the mock-backed one."""
    from fastapi.testclient import TestClient
    from site_updater.main import app
    from site_updater.services.gemini_code_updater import get_code_updater

    app.dependency_overrides[get_code_updater] = lambda: updater
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
