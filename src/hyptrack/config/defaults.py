"""Default configuration values."""

from __future__ import annotations

from typing import Any

CONFIG_FILENAME = ".hyptrack.toml"
LOCAL_CONFIG_FILENAME = ".hyptrack.local.toml"
ENV_PREFIX = "HYPTRACK_"

DEFAULT_CONFIG: dict[str, Any] = {
    "roadmap": {
        # "status-aware" or "simple"
        "policy": "status-aware",
        "tag": "roadmap",
    },
    "logging": {
        "level": "WARNING",
    },
}
