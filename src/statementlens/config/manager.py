"""User configuration manager.

The Gemini API key may come from the saved config file or from the
environment; the environment wins so CI and one-off runs need no file.
"""
import json
import os
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Optional

from .settings import get_settings

API_KEY_ENV_VARS = ("GEMINI_API_KEY", "API_KEY")


@dataclass
class Config:
    """User configuration."""
    gemini_api_key: str
    model_name: str = ""
    log_level: str = "INFO"
    max_file_size_mb: int = 0

    def __post_init__(self):
        settings = get_settings()
        if not self.model_name:
            self.model_name = settings.llm_model_name
        if not self.max_file_size_mb:
            self.max_file_size_mb = settings.max_file_size_mb


class ConfigManager:
    """Loads, saves and validates the user configuration."""

    def __init__(self, config_file: Optional[Path] = None):
        self.config_file = Path(config_file) if config_file else get_settings().config_path
        self.config_dir = self.config_file.parent

    def load_config(self) -> Optional[Config]:
        """Load configuration from file, then apply environment overrides."""
        config_dict = {}
        if self.config_file.exists():
            try:
                with open(self.config_file, "r", encoding="utf-8") as f:
                    config_dict = json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                raise RuntimeError(f"Failed to load configuration: {e}")

        env_key = self._api_key_from_env()
        if env_key:
            config_dict["gemini_api_key"] = env_key

        if not config_dict:
            return None

        known = {f.name for f in fields(Config)}
        config_dict.setdefault("gemini_api_key", "")
        return Config(**{k: v for k, v in config_dict.items() if k in known})

    def save_config(self, config: Config) -> None:
        """Save configuration readable by the current user only."""
        try:
            self.config_dir.mkdir(parents=True, exist_ok=True)
            with open(self.config_file, "w", encoding="utf-8") as f:
                json.dump(asdict(config), f, indent=2)
            os.chmod(self.config_file, 0o600)
        except OSError as e:
            raise RuntimeError(f"Failed to save configuration: {e}")

    def validate_config(self, config: Config) -> tuple[bool, str]:
        """Validate configuration values."""
        if not config.gemini_api_key:
            return False, "Gemini API key is required"

        if not config.model_name:
            return False, "Model name is required"

        if config.log_level.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            return False, f"Unknown log level: {config.log_level}"

        if config.max_file_size_mb < 1:
            return False, "Max file size must be at least 1 MB"

        return True, "Configuration is valid"

    @staticmethod
    def _api_key_from_env() -> str:
        for name in API_KEY_ENV_VARS:
            value = os.getenv(name, "").strip()
            if value:
                return value
        return ""
