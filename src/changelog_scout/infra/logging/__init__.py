from __future__ import annotations

from .logger import ScoutLogger
from .formatters import HumanReadableFormatter, JSONFormatter

__all__ = [
    "ScoutLogger",
    "HumanReadableFormatter",
    "JSONFormatter",
]
