"""Pydantic schemas for the farm input form (two explicit variants)."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.models.enums import CropType, Region


def _blank_to_none(value: Any) -> Any:
	if isinstance(value, str) and not value.strip():
		return None
	return value


class SoilInputs(BaseModel):
	"""Fields shared by both form variants."""

	model_config = ConfigDict(frozen=True, extra="ignore")

	region: Region
	soil_ph: float = Field(ge=0, le=14, allow_inf_nan=False)
	previous_crop: CropType | None = None
	nitrogen: float | None = Field(default=None, ge=0, allow_inf_nan=False)
	phosphorus: float | None = Field(default=None, ge=0, allow_inf_nan=False)
	potassium: float | None = Field(default=None, ge=0, allow_inf_nan=False)

	@field_validator("previous_crop", "nitrogen", "phosphorus", "potassium", mode="before")
	@classmethod
	def _optional_blank(cls, value: Any) -> Any:
		return _blank_to_none(value)


class PredictionForm(SoilInputs):
	"""Full yield-prediction input; area is in biswa."""

	crop_type: CropType
	area_biswa: float = Field(gt=0, allow_inf_nan=False)


class PriorityForm(SoilInputs):
	"""Crop-priority input; no planned crop and no area."""


class Coordinates(BaseModel):
	model_config = ConfigDict(frozen=True)

	latitude: float = Field(allow_inf_nan=False)
	longitude: float = Field(allow_inf_nan=False)


DEFAULT_FORM: dict[str, Any] = {
	"crop_type": CropType.wheat.value,
	"region": Region.punjab.value,
	"area_biswa": 20,
	"soil_ph": 6.5,
	"previous_crop": CropType.rice.value,
}
