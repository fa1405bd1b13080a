"""
Pydantic schemas for image descriptors submitted to the guard
"""

from typing import Any
from uuid import UUID

from pydantic import AnyUrl, BaseModel, ConfigDict, Field, TypeAdapter, field_validator

_url_adapter = TypeAdapter(AnyUrl)


class ImageMeta(BaseModel):
    """
    Generation metadata attached to an image.

    Every key is optional and unknown keys are kept. Numeric settings may
    arrive as strings and are coerced to numbers.
    """

    prompt: str | None = None
    negative_prompt: str | None = Field(default=None, alias="negativePrompt")
    cfg_scale: float | None = Field(default=None, alias="cfgScale")
    steps: int | float | None = None
    sampler: str | None = None
    seed: int | float | None = None

    model_config = ConfigDict(extra="allow", populate_by_name=True)


class ImageAnalysis(BaseModel):
    """Classifier scores for an image"""

    drawing: float
    hentai: float
    neutral: float
    porn: float
    sexy: float


class ImageDescriptor(BaseModel):
    """
    An image as supplied by the data-fetching layer.

    Only ``id`` and ``nsfw`` matter to the guard; everything else is
    validated and passed back untouched.
    """

    id: int | None = None
    nsfw: bool = False
    name: str | None = None
    url: str | None = None
    meta: ImageMeta | None = None
    hash: str | None = None
    width: int | None = None
    height: int | None = None
    analysis: ImageAnalysis | None = None

    model_config = ConfigDict(extra="allow")

    @field_validator("meta", mode="before")
    @classmethod
    def empty_meta_to_none(cls, v: Any) -> Any:
        """Treat non-object or empty metadata as missing"""
        if not isinstance(v, dict) or not v:
            return None
        return v

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str | None) -> str | None:
        """Accept a URL or an upload UUID"""
        if v is None:
            return v
        try:
            UUID(v)
            return v
        except ValueError:
            pass
        try:
            _url_adapter.validate_python(v)
        except ValueError as e:
            raise ValueError("One of the files did not upload properly, please try again") from e
        return v
