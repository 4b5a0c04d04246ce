from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _clean_color_name(v: Optional[str]) -> Optional[str]:
    if v is None:
        return v
    v = v.strip()
    if not v:
        raise ValueError("color_name must not be blank")
    return v


class FilamentBase(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    color_name: str = Field(..., min_length=1, description="Display color name")
    brand: str = Field("Bambu Lab", description="Manufacturer")
    material: str = Field("PLA", description="Material type")
    diameter_mm: float = Field(1.75, gt=0, description="Filament diameter (mm)")
    price_per_kg: float = Field(..., gt=0, description="Spool price per kg")
    notes: Optional[str] = None

    @field_validator("color_name")
    @classmethod
    def strip_color_name(cls, v: str) -> str:
        return _clean_color_name(v)


class FilamentCreate(FilamentBase):
    cost_per_gram: Optional[float] = Field(None, ge=0, description="Defaults to price_per_kg / 1000")


class FilamentUpdate(BaseModel):
    """Partial update: omitted fields are untouched, ``notes: null`` clears the note."""

    model_config = ConfigDict(allow_inf_nan=False)

    color_name: Optional[str] = Field(None, min_length=1)
    brand: Optional[str] = None
    material: Optional[str] = None
    diameter_mm: Optional[float] = Field(None, gt=0)
    price_per_kg: Optional[float] = Field(None, gt=0)
    cost_per_gram: Optional[float] = Field(None, ge=0)
    notes: Optional[str] = None

    @field_validator("color_name")
    @classmethod
    def strip_color_name(cls, v: Optional[str]) -> Optional[str]:
        return _clean_color_name(v)

    @field_validator("notes")
    @classmethod
    def blank_notes_to_none(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            return None
        return v


# Columns that accept NULL; an explicit null for any other field is ignored
NULLABLE_UPDATE_FIELDS = {"notes"}


class FilamentRead(FilamentBase):
    model_config = ConfigDict(from_attributes=True)

    id: int
    cost_per_gram: float
