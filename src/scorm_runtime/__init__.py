"""SCORM run-time engine.

Public API
----------
Session:
    RuntimeSession, RuntimeVariant

Config:
    RuntimeSettings, load_settings, setup_logging_from

SCORM 1.2:
    Scorm12API, SCORM12_VARIANT
"""

from scorm_runtime.api.session import RuntimeSession
from scorm_runtime.api.variant import RuntimeVariant
from scorm_runtime.core.config import RuntimeSettings, load_settings
from scorm_runtime.observability.logger import setup_logging_from
from scorm_runtime.variants.scorm12.api import SCORM12_VARIANT, Scorm12API

__all__ = [
    "RuntimeSession",
    "RuntimeSettings",
    "RuntimeVariant",
    "SCORM12_VARIANT",
    "Scorm12API",
    "load_settings",
    "setup_logging_from",
]
