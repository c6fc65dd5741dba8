"""
API Request Models

Pydantic models for API request validation.
"""
from typing import Optional
from pydantic import BaseModel, Field

from config import MAX_CANVAS_SIDE


class SceneRequest(BaseModel):
    width: int = Field(1920, gt=0, le=MAX_CANVAS_SIDE)
    height: int = Field(1080, gt=0, le=MAX_CANVAS_SIDE)
    family: Optional[str] = None  # waves, blobs, ovals, clouds, trees or random; None = configured family
    seed: Optional[int] = None  # None = fresh randomness
    dark: Optional[bool] = None  # None = use configured background mode
    motto: Optional[str] = None  # overrides configured motto text
    vertical: Optional[bool] = None  # rotate the motto a quarter turn
