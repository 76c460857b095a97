"""Application settings loader from YAML configuration."""
import os
import yaml
from pathlib import Path
from typing import List, Optional
from dataclasses import dataclass


@dataclass
class AppSettings:
    """Application-wide settings loaded from config.yaml."""

    # App info
    app_name: str
    app_version: str

    # Logging
    log_level: str
    log_max_file_size_mb: int
    log_backup_count: int

    # LLM
    llm_model_name: str
    llm_response_mime_type: str

    # Uploads
    accepted_mime_prefixes: List[str]
    max_file_size_mb: int

    # Paths
    app_dir: str
    config_file: str
    logs_dir: str
    previews_dir: str

    @property
    def app_path(self) -> Path:
        return Path(os.getenv("STATEMENTLENS_HOME") or self.app_dir).expanduser()

    @property
    def config_path(self) -> Path:
        return self.app_path / self.config_file

    @property
    def logs_path(self) -> Path:
        return self.app_path / self.logs_dir

    @property
    def previews_path(self) -> Path:
        return self.app_path / self.previews_dir

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "AppSettings":
        """Load settings from YAML file."""
        if config_path is None:
            # Default to the config.yaml shipped inside the package
            config_path = Path(__file__).parent.parent / "config.yaml"

        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f)

        return cls(
            app_name=config["app"]["name"],
            app_version=str(config["app"]["version"]),
            log_level=config["logging"]["level"],
            log_max_file_size_mb=config["logging"]["max_file_size_mb"],
            log_backup_count=config["logging"]["backup_count"],
            llm_model_name=config["llm"]["model_name"],
            llm_response_mime_type=config["llm"]["response_mime_type"],
            accepted_mime_prefixes=list(config["uploads"]["accepted_mime_prefixes"]),
            max_file_size_mb=config["uploads"]["max_file_size_mb"],
            app_dir=config["paths"]["app_dir"],
            config_file=config["paths"]["config_file"],
            logs_dir=config["paths"]["logs_dir"],
            previews_dir=config["paths"]["previews_dir"],
        )


# Global settings instance
_settings: Optional[AppSettings] = None


def get_settings() -> AppSettings:
    """Get or create global settings instance."""
    global _settings
    if _settings is None:
        _settings = AppSettings.load()
    return _settings
