"""
PalCreator Request Schemas
Pydantic models validating entry-point arguments before any image read or
numeric computation.
"""
import math
from numbers import Real
from typing import Any, List, Type, TypeVar

from pydantic import BaseModel, Field, ValidationError, field_validator

from palcreator.config import config
from palcreator.exceptions import InvalidParameter
from palcreator.services.colors.alpha import as_alpha_list, as_palette_list, check_alpha_range

M = TypeVar("M", bound=BaseModel)


def _strict_bool(value: Any, name: str) -> bool:
    if not isinstance(value, bool):
        raise ValueError(f'Argument passed to "{name}" is not logical!')
    return value


def _title(value: Any) -> str:
    if not isinstance(value, str):
        raise ValueError("Incorrect title for the palette!")
    return value


class ExtractPaletteRequest(BaseModel):
    """Arguments of extract_palette."""
    image: Any = Field(..., description="Path, bytes, file object, PIL image or RGB array")
    n: int = Field(..., description="Number of colors in the palette")
    resize: float = Field(config.DEFAULT_RESIZE, description="Fraction applied to width and height, in (0, 1]")
    method: str = Field(config.DEFAULT_METHOD, description="Clustering method: kmeans or gaussian_mix")
    colorblind: bool = Field(False, description="Substitute colorblind-safe colors")
    sort: str = Field("none", description="none, hue, saturation or value")
    show_pal: bool = Field(True, description="Preview the palette grid")
    title: str = Field("", description="Title of the previewed palette")

    @field_validator("n", mode="before")
    @classmethod
    def validate_n(cls, v: Any) -> int:
        if (isinstance(v, bool) or not isinstance(v, Real) or not math.isfinite(v)
                or v <= 0 or v != math.floor(v)):
            raise ValueError("Incorrect n value. Use positive integer only!")
        return int(v)

    @field_validator("resize", mode="before")
    @classmethod
    def validate_resize(cls, v: Any) -> float:
        if isinstance(v, bool) or not isinstance(v, Real) or not config.validate_resize(float(v)):
            raise ValueError("Incorrect resize value!")
        return float(v)

    @field_validator("method", mode="before")
    @classmethod
    def validate_method(cls, v: Any) -> str:
        if not config.validate_method(v):
            raise ValueError("Incorrect clustering method!")
        return config.resolve_method(v)

    @field_validator("colorblind", "show_pal", mode="before")
    @classmethod
    def validate_flags(cls, v: Any, info) -> bool:
        return _strict_bool(v, info.field_name)

    @field_validator("sort", mode="before")
    @classmethod
    def validate_sort(cls, v: Any) -> str:
        if not config.validate_sort(v):
            raise ValueError("Unknown sorting method!")
        return v

    @field_validator("title", mode="before")
    @classmethod
    def validate_title(cls, v: Any) -> str:
        return _title(v)


class AttachAlphaRequest(BaseModel):
    """Arguments of attach_alpha."""

    pal: List[str] = Field(..., description="Colors as #RRGGBB strings")
    alpha: List[float] = Field(..., description="One alpha, or one per color, in [0, 1]")
    show_pal: bool = Field(True, description="Preview the palette grid")
    title: str = Field("", description="Title of the previewed palette")

    @field_validator("pal", mode="before")
    @classmethod
    def validate_pal(cls, v: Any) -> List[str]:
        return as_palette_list(v)

    @field_validator("alpha", mode="before")
    @classmethod
    def validate_alpha(cls, v: Any) -> List[float]:
        return check_alpha_range(as_alpha_list(v))

    @field_validator("show_pal", mode="before")
    @classmethod
    def validate_show_pal(cls, v: Any) -> bool:
        return _strict_bool(v, "show_pal")

    @field_validator("title", mode="before")
    @classmethod
    def validate_title(cls, v: Any) -> str:
        return _title(v)


def validate_request(model: Type[M], **kwargs: Any) -> M:
    """
    Build a request model, turning pydantic errors into InvalidParameter.

    The first failing field is reported; its validator message is kept
    verbatim.
    """
    try:
        return model(**kwargs)
    except ValidationError as e:
        error = e.errors()[0]
        field = ".".join(str(part) for part in error["loc"]) or None
        ctx_error = error.get("ctx", {}).get("error")
        message = str(ctx_error) if ctx_error is not None else error["msg"]
        raise InvalidParameter(message, field=field) from None
