"""
jwt_inspect.cli

The `jwt-inspect` console command:

- InspectSettings: output settings for the command.
- settings_from_env: builds settings from JWT_INSPECT_* variables.
- main: argument parsing, decoding and report printing.
"""

from __future__ import annotations

from .env import settings_from_env
from .main import main
from .settings import InspectSettings

__all__ = [
    "InspectSettings",
    "settings_from_env",
    "main",
]
