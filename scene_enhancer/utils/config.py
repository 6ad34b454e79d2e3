"""Configuration management for the scene enhancer."""

import os
from pathlib import Path
from typing import Optional
import yaml
from pydantic import BaseModel, Field
from dotenv import load_dotenv

from .errors import ConfigurationError
from .logger import get_logger

logger = get_logger(__name__)

# Load environment variables
load_dotenv()

DEFAULT_CONFIG_PATH = Path("config/models.yaml")


class AnalysisConfig(BaseModel):
    """Configuration for the vision analysis stage."""
    model: str = "gpt-4.1-mini"
    user_instruction: str = "Analyze this image and return the requested JSON."
    rejection_reason: str = "Rejected by analysis"


class GenerationConfig(BaseModel):
    """Configuration for the image generation stage."""
    model: str = "gpt-image-1"
    size: str = "1024x1024"
    fallback_prompt: str = "Improve the image."
    # gpt-image-1 always answers with base64 and rejects this parameter;
    # older models need "b64_json" here.
    response_format: Optional[str] = None


class Config(BaseModel):
    """Main application configuration."""

    # API Keys
    openai_api_key: str = Field(..., alias="OPENAI_API_KEY")
    openai_base_url: str = Field(default="https://api.openai.com/v1", alias="OPENAI_BASE_URL")

    # Application Settings
    app_env: str = Field(default="development", alias="APP_ENV")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=3000, alias="PORT")
    max_body_bytes: int = Field(default=15 * 1024 * 1024, alias="MAX_BODY_BYTES")

    # Timeout Settings
    timeout_openai_seconds: float = Field(default=600.0, alias="TIMEOUT_OPENAI_SECONDS")

    # Model Configuration
    analysis: AnalysisConfig = Field(default_factory=AnalysisConfig)
    generation: GenerationConfig = Field(default_factory=GenerationConfig)

    class Config:
        populate_by_name = True


# Global config instance
_config: Optional[Config] = None


def load_config(path: Optional[Path] = None) -> Config:
    """
    Load configuration from environment and the models YAML file.

    The YAML file is optional; built-in model defaults apply without it.

    Args:
        path: Location of models.yaml (defaults to config/models.yaml)

    Returns:
        Config instance

    Raises:
        ConfigurationError: If configuration is invalid
    """
    global _config

    models_path = Path(path) if path is not None else DEFAULT_CONFIG_PATH

    try:
        models_config = {}
        if models_path.exists():
            with open(models_path, "r", encoding="utf-8") as f:
                models_config = yaml.safe_load(f) or {}
        else:
            logger.warning(
                f"models.yaml not found at {models_path}, using built-in defaults",
                extra={"path": str(models_path)}
            )

        # Merge environment variables with YAML config
        config_data = {
            **os.environ,
            **models_config,
        }

        _config = Config(**config_data)

    except Exception as e:
        raise ConfigurationError(f"Failed to load configuration: {e}")

    logger.info(
        "Configuration loaded successfully",
        extra={
            "environment": _config.app_env,
            "analysis_model": _config.analysis.model,
            "generation_model": _config.generation.model,
        }
    )

    return _config

