"""Pytest configuration and shared fixtures."""

import json
from typing import Any, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from scene_enhancer.core import SceneAnalyzer, ImageGenerator, Orchestrator
from scene_enhancer.main import app, build_orchestrator
from scene_enhancer.utils.config import Config


class StubProvider:
    """Stands in for OpenAIClient; records every call."""

    def __init__(
        self,
        plan_content: Optional[str] = "{}",
        image_data: Optional[List[Dict[str, Any]]] = None,
        analysis_error: Optional[Exception] = None,
        generation_error: Optional[Exception] = None,
    ):
        self.plan_content = plan_content
        self.image_data = image_data if image_data is not None else []
        self.analysis_error = analysis_error
        self.generation_error = generation_error
        self.analysis_calls: List[Dict[str, Any]] = []
        self.generation_calls: List[Dict[str, Any]] = []

    async def complete_json(self, system_prompt, user_text, image_url, model):
        self.analysis_calls.append({
            "system_prompt": system_prompt,
            "user_text": user_text,
            "image_url": image_url,
            "model": model,
        })
        if self.analysis_error:
            raise self.analysis_error
        return self.plan_content or "{}"

    async def generate_image(self, prompt, model, size="1024x1024", response_format=None):
        self.generation_calls.append({
            "prompt": prompt,
            "model": model,
            "size": size,
            "response_format": response_format,
        })
        if self.generation_error:
            raise self.generation_error
        return self.image_data


def plan_json(**fields) -> str:
    """Serialize an edit plan the way the vision model returns it."""
    return json.dumps(fields)


@pytest.fixture
def config():
    """Configuration with built-in model defaults."""
    return Config(OPENAI_API_KEY="test-key")


@pytest.fixture
def provider():
    """Provider returning a valid plan and no image by default."""
    return StubProvider(
        plan_content=plan_json(
            valid_image=True,
            reason="",
            scene_type="living room",
            edit_summary="Place the sofa against the back wall",
            placement_instructions="Centered under the window",
            lighting_instructions="Warm afternoon light from the left",
            extra_improvements="Declutter the floor",
            image_prompt="A grey sofa in a bright living room",
        ),
        image_data=[{"b64_json": "aGVsbG8="}],
    )


@pytest.fixture
def analyzer(provider):
    return SceneAnalyzer(provider)


@pytest.fixture
def generator(provider):
    return ImageGenerator(provider)


@pytest.fixture
def orchestrator(analyzer, generator):
    return Orchestrator(analyzer, generator)


@pytest.fixture
def api_client(config, provider):
    """TestClient whose app state is wired to the stub provider."""
    app.state.orchestrator = build_orchestrator(config, provider)
    app.state.max_body_bytes = config.max_body_bytes
    client = TestClient(app)
    yield client
    del app.state.orchestrator
    del app.state.max_body_bytes


@pytest.fixture
def sample_image_url():
    """Sample image URL for testing."""
    return "https://x/img.jpg"
