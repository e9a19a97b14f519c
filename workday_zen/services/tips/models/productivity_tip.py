"""Response models for tip generation"""
from typing import Optional

from pydantic import BaseModel, Field


class ProductivityTip(BaseModel):
    """Short contextual tip for the current stage of the workday"""
    title: str = Field(description="Brief, inspiring headline, under 100 characters")
    advice: str = Field(description="Concrete focus strategy or productivity advice, under 200 characters")


class TipLookupResult(BaseModel):
    """Either a generated tip or the signal to use the local fallback"""
    tip: Optional[ProductivityTip] = None
    use_fallback: bool = False

    @classmethod
    def fallback(cls) -> "TipLookupResult":
        return cls(use_fallback=True)
