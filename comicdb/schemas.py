"""
Pydantic schemas for persisted slots.
Each model describes the JSON stored in one slot. Field aliases accept the
camelCase keys used by earlier exports.
"""

from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, RootModel, field_validator

from .models import CategoryDefinition, SiteConfig


class CategoryDefinitionPayload(BaseModel):
	model_config = ConfigDict(populate_by_name=True)

	id: str = Field(..., min_length=1)  # internal key
	label: str  # display name
	is_system: bool = Field(False, alias='isSystem')  # bound to a Comic field?
	selection_arity: Literal['single', 'multiple'] = Field('multiple', alias='type')  # selection type

	def to_model(self) -> CategoryDefinition:
		return CategoryDefinition(
			id=self.id,
			label=self.label,
			is_system=self.is_system,
			selection_arity=self.selection_arity,
		)


class CategoryDefinitionsPayload(RootModel[List[CategoryDefinitionPayload]]):
	"""Ordered list of definitions; ids must be unique."""

	@field_validator('root')
	@classmethod
	def unique_ids(cls, value: List[CategoryDefinitionPayload]) -> List[CategoryDefinitionPayload]:
		seen = set()
		for definition in value:
			if definition.id in seen:
				raise ValueError(f"duplicate category id '{definition.id}'")
			seen.add(definition.id)
		return value


class CategoryOptionsPayload(RootModel[Dict[str, List[str]]]):
	"""Category id -> ordered option list."""


class SiteConfigPayload(BaseModel):
	model_config = ConfigDict(populate_by_name=True)

	main_title: str = Field(..., alias='mainTitle')
	sub_title: str = Field(..., alias='subTitle')
	logo_text: str = Field(..., alias='logoText')
	logo_image_url: Optional[str] = Field('', alias='logoImageUrl')

	def to_model(self) -> SiteConfig:
		return SiteConfig(
			main_title=self.main_title,
			sub_title=self.sub_title,
			logo_text=self.logo_text,
			logo_image_url=self.logo_image_url or '',
		)
