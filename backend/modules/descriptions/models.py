"""Data models for product description generation."""

from typing import Optional
from pydantic import BaseModel, Field


class BrandProfile(BaseModel):
    """Brand voice applied to every description for a store."""

    description: str = Field(..., min_length=1, description="Brand voice in a sentence or two")
    tone: Optional[str] = Field(None, description="Preferred brand tone")


class DescriptionRequest(BaseModel):
    """Everything known about a product before its copy is written."""

    product_name: str = Field(..., min_length=1)
    features: list[str] = Field(default_factory=list)
    target_audience: Optional[str] = None
    tone: Optional[str] = None
    keywords: list[str] = Field(default_factory=list)
    category: Optional[str] = None
    brand_profile: Optional[BrandProfile] = None


class RegenerationRequest(BaseModel):
    """Ask for a rewrite of an existing description."""

    previous_description: str = Field(..., min_length=1)
    feedback: Optional[str] = None


class GeneratedDescription(BaseModel):
    """Generated copy returned to the caller."""

    description: str
    model: str
