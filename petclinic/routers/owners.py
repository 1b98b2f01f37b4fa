from fastapi import APIRouter, Depends, Query, Response, status
from typing import Optional
import logging

from .. import mapper
from ..errors import NotFoundError, OwnershipMismatch, ValidationFailed
from ..models import Owner
from ..schemas.owner import OwnerDto, OwnerFieldsDto
from ..schemas.pet import PetDto, PetFieldsDto
from ..security import OWNER_ADMIN, require_roles
from ..service import ClinicService, get_clinic_service
from ..validation import validate_owner_fields, validate_pet_fields

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_roles(OWNER_ADMIN))])


async def _get_owner_or_404(service: ClinicService, owner_id: int):
    owner = await service.find_owner_by_id(owner_id)
    if owner is None:
        raise NotFoundError("Owner", owner_id)
    return owner


def _check_pet_fields(payload: PetFieldsDto) -> None:
    violations = validate_pet_fields(payload)
    if violations:
        raise ValidationFailed(violations)


@router.get("", response_model=list[OwnerDto])
async def list_owners(
    last_name: Optional[str] = Query(None, alias="lastName"),
    service: ClinicService = Depends(get_clinic_service),
):
    if last_name:
        owners = await service.find_owners_by_last_name(last_name)
    else:
        owners = await service.find_all_owners()
    return mapper.to_owner_dtos(owners)


@router.post("", response_model=OwnerDto, status_code=status.HTTP_201_CREATED)
async def add_owner(
    payload: OwnerFieldsDto,
    response: Response,
    service: ClinicService = Depends(get_clinic_service),
):
    violations = validate_owner_fields(payload)
    if violations:
        raise ValidationFailed(violations)
    owner = await service.save_owner(mapper.to_owner(payload))
    response.headers["Location"] = f"/api/owners/{owner.id}"
    logger.info("Created owner %s", owner.id)
    return mapper.to_owner_dto(owner)


@router.get("/{owner_id}", response_model=OwnerDto)
async def get_owner(owner_id: int, service: ClinicService = Depends(get_clinic_service)):
    owner = await _get_owner_or_404(service, owner_id)
    return mapper.to_owner_dto(owner)


@router.post("/{owner_id}/pets", response_model=PetDto, status_code=status.HTTP_201_CREATED)
async def add_pet_to_owner(
    owner_id: int,
    payload: PetFieldsDto,
    response: Response,
    service: ClinicService = Depends(get_clinic_service),
):
    # validation first: a rejected body never reaches the service
    _check_pet_fields(payload)
    pet = mapper.to_pet(payload)
    pet.owner = Owner(id=owner_id)
    pet = await service.save_pet(pet)
    response.headers["Location"] = f"/api/pets/{pet.id}"
    logger.info("Created pet %s for owner %s", pet.id, owner_id)
    return mapper.to_pet_dto(pet)


@router.get("/{owner_id}/pets/{pet_id}", response_model=PetDto)
async def get_owners_pet(
    owner_id: int,
    pet_id: int,
    service: ClinicService = Depends(get_clinic_service),
):
    owner = await _get_owner_or_404(service, owner_id)
    pet = owner.get_pet(pet_id)
    if pet is None:
        raise NotFoundError("Pet", pet_id)
    return mapper.to_pet_dto(pet)


@router.put("/{owner_id}/pets/{pet_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_owners_pet(
    owner_id: int,
    pet_id: int,
    payload: PetFieldsDto,
    service: ClinicService = Depends(get_clinic_service),
):
    """
    Updates name, birth date and type. Weight is only touched when the key
    is present in the body: a number sets it, null clears it. A pet that is
    not stored yet is created under ``pet_id`` for this owner.
    """
    _check_pet_fields(payload)
    pet = await service.find_pet_by_id(pet_id)
    if pet is None:
        pet = mapper.to_pet(payload)
        pet.id = pet_id
        pet.owner = Owner(id=owner_id)
        await service.save_pet(pet)
        logger.info("Created pet %s for owner %s on update", pet_id, owner_id)
        return None
    if pet.owner is not None and pet.owner.id != owner_id:
        raise OwnershipMismatch(owner_id, pet_id)

    pet.name = payload.name
    pet.birth_date = payload.birth_date
    pet.type = mapper.to_pet_type(payload.type)
    if "weight" in payload.model_fields_set:
        pet.weight = payload.weight
    await service.save_pet(pet)
    return None
