from fastapi import APIRouter, Depends

from .. import mapper
from ..errors import NotFoundError
from ..schemas.pet import PetTypeDto
from ..security import OWNER_ADMIN, VET_ADMIN, require_roles
from ..service import ClinicService, get_clinic_service

router = APIRouter(dependencies=[Depends(require_roles(OWNER_ADMIN, VET_ADMIN))])


@router.get("", response_model=list[PetTypeDto])
async def list_pet_types(service: ClinicService = Depends(get_clinic_service)):
    return mapper.to_pet_type_dtos(await service.find_all_pet_types())


@router.get("/{type_id}", response_model=PetTypeDto)
async def get_pet_type(type_id: int, service: ClinicService = Depends(get_clinic_service)):
    pet_type = await service.find_pet_type_by_id(type_id)
    if pet_type is None:
        raise NotFoundError("Pet type", type_id)
    return mapper.to_pet_type_dto(pet_type)
