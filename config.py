"""Configuration settings for the notex application."""
import os
from dataclasses import dataclass
from typing import Optional


@dataclass
class Config:
    """Application configuration settings.

    Centralized configuration to avoid hardcoded values throughout the codebase.
    """
    # Storage
    project_filename: str = ".notex.json"
    global_filename: str = ".notex-global.json"

    # History and timing (milliseconds unless noted)
    history_limit: int = 300
    notice_ms: int = 1200
    exit_confirm_ms: int = 1500
    tick_interval: float = 0.1  # seconds

    # Layout
    default_viewport_rows: int = 24
    header_rows: int = 5  # title + stats + padding
    footer_rows: int = 6  # instructions + notices
    min_visible_rows: int = 3
    help_two_column_width: int = 72

    # Colors
    color_primary: str = "#0abdc6"  # Cyan - selection marker, key names
    color_accent: str = "#ff00ff"  # Magenta - app title
    color_bg_dark: str = "#1a1a2e"  # Dark background
    color_bg_medium: str = "#2d2d44"  # Medium background
    color_text: str = "#e2e8f0"  # Light text

    # Logging
    log_file: Optional[str] = None
    log_level: str = "INFO"

    @classmethod
    def load(cls) -> 'Config':
        """
        Load configuration.

        Logging can be redirected with NOTEX_LOG_FILE and NOTEX_LOG_LEVEL;
        everything else uses the defaults above.

        Returns:
            Config instance with default or loaded values
        """
        return cls(
            log_file=os.environ.get("NOTEX_LOG_FILE") or None,
            log_level=os.environ.get("NOTEX_LOG_LEVEL", "INFO").upper(),
        )


# Global config instance
config = Config.load()
