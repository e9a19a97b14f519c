"""Contextual productivity tips"""

from workday_zen.services.tips.fallback_content import get_fallback_tip
from workday_zen.services.tips.models.productivity_tip import ProductivityTip, TipLookupResult
from workday_zen.services.tips.tip_service import TipProvider, TipService

__all__ = [
    "ProductivityTip",
    "TipLookupResult",
    "TipProvider",
    "TipService",
    "get_fallback_tip",
]
