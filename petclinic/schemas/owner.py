from typing import List, Optional
from pydantic import Field

from .pet import CamelModel, PetDto


class OwnerFieldsDto(CamelModel):
    first_name: str
    last_name: str
    address: str
    city: str
    telephone: str


class OwnerDto(OwnerFieldsDto):
    id: Optional[int] = None
    pets: List[PetDto] = Field(default_factory=list)
