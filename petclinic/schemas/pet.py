from pydantic import BaseModel, ConfigDict, Field, PlainSerializer, model_serializer
from pydantic.alias_generators import to_camel
from typing import Annotated, Optional
from datetime import date
from decimal import Decimal

# Decimal goes out as a bare JSON number (pydantic would write a string)
Weight = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PetTypeDto(CamelModel):
    id: int
    name: str


class PetFieldsDto(CamelModel):
    """Writable pet attributes, used to create or update a pet under an owner."""
    name: str
    birth_date: date
    type: PetTypeDto
    weight: Optional[Weight] = Field(None, description="Weight in kilograms")


class PetDto(PetFieldsDto):
    id: Optional[int] = None
    owner_id: Optional[int] = None

    @model_serializer(mode="wrap")
    def _drop_missing_fields(self, handler):
        data = handler(self)
        # unset optional fields (weight, id, ownerId) get no key at all, never null
        for name, info in type(self).model_fields.items():
            if not info.is_required() and getattr(self, name) is None:
                data.pop(info.alias or name, None)
                data.pop(name, None)
        return data
