from __future__ import annotations

from dataclasses import dataclass

DEFAULT_INDENT = 4


@dataclass(slots=True)
class InspectSettings:
    """
    Output settings for the jwt-inspect command.

    Host code decides how to construct this (env, CLI flags, etc.).
    """
    indent: int = DEFAULT_INDENT
    show_signature: bool = True
    json_output: bool = False
    verbose: bool = False
