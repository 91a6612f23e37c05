"""Process-level setup for hosts embedding event channels."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from .channel import set_subscriber_warning_threshold
from .config import load_config
from .logging_utils import configure_logging


def configure(config_path: Path | None = None) -> dict[str, dict[str, Any]]:
    """Load config, set up logging and channel diagnostics, return the config."""
    config = load_config(config_path=config_path)
    configure_logging(config["logging"])
    set_subscriber_warning_threshold(
        config["diagnostics"]["subscriber_warning_threshold"]
    )
    return config
