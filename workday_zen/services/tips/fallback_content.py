"""Fallback content for when tip generation fails"""
from .models.productivity_tip import ProductivityTip

FALLBACK_TITLE = "Stay Focused"
FALLBACK_ADVICE = "Remember to take short breaks and stay hydrated throughout your journey."


def get_fallback_tip() -> ProductivityTip:
    """Return the fixed local tip used whenever the lookup cannot be trusted."""
    return ProductivityTip(title=FALLBACK_TITLE, advice=FALLBACK_ADVICE)
