"""SCORM 1.2 variant."""

from scorm_runtime.variants.scorm12.api import SCORM12_VARIANT, Scorm12API

__all__ = ["SCORM12_VARIANT", "Scorm12API"]
