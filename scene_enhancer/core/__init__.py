"""Core business logic components."""

from .prompt_builder import build_prompt
from .scene_analyzer import SceneAnalyzer, parse_plan
from .image_generator import ImageGenerator
from .orchestrator import Orchestrator, assemble_result

__all__ = [
    "build_prompt",
    "SceneAnalyzer",
    "parse_plan",
    "ImageGenerator",
    "Orchestrator",
    "assemble_result",
]
