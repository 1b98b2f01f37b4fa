from fastapi import APIRouter, Depends, Response, status
import logging

from .. import mapper
from ..errors import NotFoundError, ValidationFailed
from ..schemas.pet import PetDto
from ..security import OWNER_ADMIN, require_roles
from ..service import ClinicService, get_clinic_service
from ..validation import validate_pet_fields

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_roles(OWNER_ADMIN))])


async def _get_pet_or_404(service: ClinicService, pet_id: int):
    pet = await service.find_pet_by_id(pet_id)
    if pet is None:
        raise NotFoundError("Pet", pet_id)
    return pet


@router.get("", response_model=list[PetDto])
async def list_pets(service: ClinicService = Depends(get_clinic_service)):
    pets = await service.find_all_pets()
    return mapper.to_pet_dtos(pets)


@router.get("/{pet_id}", response_model=PetDto)
async def get_pet(pet_id: int, service: ClinicService = Depends(get_clinic_service)):
    pet = await _get_pet_or_404(service, pet_id)
    return mapper.to_pet_dto(pet)


@router.post("", response_model=PetDto, status_code=status.HTTP_201_CREATED)
async def add_pet(
    payload: PetDto,
    response: Response,
    service: ClinicService = Depends(get_clinic_service),
):
    violations = validate_pet_fields(payload)
    if violations:
        raise ValidationFailed(violations)
    pet = mapper.to_pet(payload)
    pet.id = None  # ids are assigned by the service
    pet = await service.save_pet(pet)
    response.headers["Location"] = f"/api/pets/{pet.id}"
    logger.info("Created pet %s", pet.id)
    return mapper.to_pet_dto(pet)


@router.put("/{pet_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_pet(
    pet_id: int,
    payload: PetDto,
    service: ClinicService = Depends(get_clinic_service),
):
    """Full replacement of the editable fields. A null or missing weight clears it."""
    violations = validate_pet_fields(payload)
    if violations:
        raise ValidationFailed(violations)
    pet = await _get_pet_or_404(service, pet_id)
    pet.name = payload.name
    pet.birth_date = payload.birth_date
    pet.type = mapper.to_pet_type(payload.type)
    pet.weight = payload.weight
    await service.save_pet(pet)
    return None


@router.delete("/{pet_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_pet(pet_id: int, service: ClinicService = Depends(get_clinic_service)):
    pet = await _get_pet_or_404(service, pet_id)
    await service.delete_pet(pet)
    logger.info("Deleted pet %s", pet_id)
    return None
