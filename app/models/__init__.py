"""Shared vocabularies: application code can do::

    from app.models import CropType, Region, LanguageCode
"""

from app.models.enums import CropType, LanguageCode, Region, YieldUnit

__all__ = [
    "CropType",
    "LanguageCode",
    "Region",
    "YieldUnit",
]
