"""
Conversions between entities and transfer objects.

All functions are pure: they build new objects and never touch the service.
"""
from typing import Iterable, List, Union

from .models import Owner, Pet, PetType
from .schemas.owner import OwnerDto, OwnerFieldsDto
from .schemas.pet import PetDto, PetFieldsDto, PetTypeDto


def to_pet_type(dto: PetTypeDto) -> PetType:
    return PetType(id=dto.id, name=dto.name)


def to_pet_type_dto(pet_type: PetType) -> PetTypeDto:
    return PetTypeDto(id=pet_type.id, name=pet_type.name)


def to_pet_type_dtos(pet_types: Iterable[PetType]) -> List[PetTypeDto]:
    return [to_pet_type_dto(t) for t in pet_types]


def to_pet(dto: Union[PetDto, PetFieldsDto]) -> Pet:
    """Builds a Pet from either a full PetDto or a PetFieldsDto."""
    pet = Pet(
        name=dto.name,
        birth_date=dto.birth_date,
        type=to_pet_type(dto.type),
        weight=dto.weight,
    )
    if isinstance(dto, PetDto):
        pet.id = dto.id
        if dto.owner_id is not None:
            pet.owner = Owner(id=dto.owner_id)
    return pet


def to_pet_dto(pet: Pet) -> PetDto:
    return PetDto(
        id=pet.id,
        name=pet.name,
        birth_date=pet.birth_date,
        type=to_pet_type_dto(pet.type),
        owner_id=pet.owner.id if pet.owner is not None else None,
        weight=pet.weight,
    )


def to_pet_dtos(pets: Iterable[Pet]) -> List[PetDto]:
    return [to_pet_dto(p) for p in pets]


def to_owner(dto: OwnerFieldsDto) -> Owner:
    owner = Owner(
        first_name=dto.first_name,
        last_name=dto.last_name,
        address=dto.address,
        city=dto.city,
        telephone=dto.telephone,
    )
    if isinstance(dto, OwnerDto):
        owner.id = dto.id
        for pet_dto in dto.pets:
            owner.add_pet(to_pet(pet_dto))
    return owner


def to_owner_dto(owner: Owner) -> OwnerDto:
    return OwnerDto(
        id=owner.id,
        first_name=owner.first_name,
        last_name=owner.last_name,
        address=owner.address,
        city=owner.city,
        telephone=owner.telephone,
        pets=to_pet_dtos(owner.pets),
    )


def to_owner_dtos(owners: Iterable[Owner]) -> List[OwnerDto]:
    return [to_owner_dto(o) for o in owners]
