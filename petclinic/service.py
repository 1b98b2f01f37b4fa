from datetime import date
from decimal import Decimal
from typing import Any, Dict, List, Optional
import logging
import re

from bson.decimal128 import Decimal128
from fastapi import Depends
from motor.motor_asyncio import AsyncIOMotorDatabase

from .db import get_db, next_id
from .errors import DataIntegrityError
from .models import Owner, Pet, PetType

logger = logging.getLogger(__name__)


class ClinicService:
    """Lookup and persistence of owners, pets and pet types (MongoDB)."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db

    # --------- pet types ---------
    async def find_pet_type_by_id(self, type_id: int) -> Optional[PetType]:
        doc = await self.db.pet_types.find_one({"_id": type_id})
        return _pet_type_from_doc(doc) if doc else None

    async def find_all_pet_types(self) -> List[PetType]:
        docs = await self.db.pet_types.find().sort("_id", 1).to_list(500)
        return [_pet_type_from_doc(d) for d in docs]

    # --------- pets ---------
    async def find_pet_by_id(self, pet_id: int) -> Optional[Pet]:
        doc = await self.db.pets.find_one({"_id": pet_id})
        if not doc:
            return None
        pet = await self._load_pet(doc)
        if doc.get("owner_id") is not None:
            owner_doc = await self.db.owners.find_one({"_id": doc["owner_id"]})
            pet.owner = _owner_from_doc(owner_doc) if owner_doc else Owner(id=doc["owner_id"])
        return pet

    async def find_all_pets(self) -> List[Pet]:
        docs = await self.db.pets.find().sort("_id", 1).to_list(1000)
        pets = []
        for d in docs:
            pet = await self._load_pet(d)
            if d.get("owner_id") is not None:
                pet.owner = Owner(id=d["owner_id"])
            pets.append(pet)
        return pets

    async def save_pet(self, pet: Pet) -> Pet:
        if pet.id is None:
            pet.id = await next_id(self.db, "pets")
        else:
            # ids chosen by the caller must not be handed out again
            await self.db.counters.update_one({"_id": "pets"}, {"$max": {"seq": pet.id}}, upsert=True)
        doc = _pet_to_doc(pet)
        await self.db.pets.replace_one({"_id": pet.id}, doc, upsert=True)
        logger.debug("Saved pet %s", pet.id)
        return pet

    async def delete_pet(self, pet: Pet) -> None:
        await self.db.pets.delete_one({"_id": pet.id})
        logger.debug("Deleted pet %s", pet.id)

    # --------- owners ---------
    async def find_owner_by_id(self, owner_id: int) -> Optional[Owner]:
        doc = await self.db.owners.find_one({"_id": owner_id})
        if not doc:
            return None
        return await self._load_owner(doc)

    async def find_all_owners(self) -> List[Owner]:
        docs = await self.db.owners.find().sort("_id", 1).to_list(1000)
        return [await self._load_owner(d) for d in docs]

    async def find_owners_by_last_name(self, last_name: str) -> List[Owner]:
        q = {"last_name": {"$regex": f"^{re.escape(last_name)}"}}
        docs = await self.db.owners.find(q).sort("_id", 1).to_list(1000)
        return [await self._load_owner(d) for d in docs]

    async def save_owner(self, owner: Owner) -> Owner:
        if owner.id is None:
            owner.id = await next_id(self.db, "owners")
        await self.db.owners.replace_one({"_id": owner.id}, _owner_to_doc(owner), upsert=True)
        logger.debug("Saved owner %s", owner.id)
        return owner

    # --------- helpers ---------
    async def _load_pet(self, doc: Dict[str, Any]) -> Pet:
        type_doc = await self.db.pet_types.find_one({"_id": doc.get("type_id")})
        if not type_doc:
            raise DataIntegrityError("Pet", doc["_id"], f"unknown pet type {doc.get('type_id')}")
        return _pet_from_doc(doc, _pet_type_from_doc(type_doc))

    async def _load_owner(self, doc: Dict[str, Any]) -> Owner:
        owner = _owner_from_doc(doc)
        pet_docs = await self.db.pets.find({"owner_id": owner.id}).sort("name", 1).to_list(200)
        for d in pet_docs:
            owner.add_pet(await self._load_pet(d))
        return owner


def _pet_type_from_doc(doc: Dict[str, Any]) -> PetType:
    return PetType(id=doc["_id"], name=doc.get("name"))


def _pet_from_doc(doc: Dict[str, Any], pet_type: PetType) -> Pet:
    name, birth = doc.get("name"), doc.get("birth_date")
    if not name or not birth:
        raise DataIntegrityError("Pet", doc["_id"], "stored without name or birth date")
    weight = doc.get("weight")
    if isinstance(weight, Decimal128):
        weight = weight.to_decimal()
    return Pet(
        id=doc["_id"],
        name=name,
        birth_date=date.fromisoformat(birth),
        type=pet_type,
        weight=weight,
    )


def _pet_to_doc(pet: Pet) -> Dict[str, Any]:
    doc: Dict[str, Any] = {
        "_id": pet.id,
        "name": pet.name,
        # BSON has no plain date type
        "birth_date": pet.birth_date.isoformat() if pet.birth_date else None,
        "type_id": pet.type.id if pet.type else None,
        "owner_id": pet.owner.id if pet.owner else None,
    }
    if pet.weight is not None:
        doc["weight"] = Decimal128(Decimal(pet.weight))
    return doc


def _owner_from_doc(doc: Dict[str, Any]) -> Owner:
    return Owner(
        id=doc["_id"],
        first_name=doc.get("first_name"),
        last_name=doc.get("last_name"),
        address=doc.get("address"),
        city=doc.get("city"),
        telephone=doc.get("telephone"),
    )


def _owner_to_doc(owner: Owner) -> Dict[str, Any]:
    return {
        "_id": owner.id,
        "first_name": owner.first_name,
        "last_name": owner.last_name,
        "address": owner.address,
        "city": owner.city,
        "telephone": owner.telephone,
    }


async def get_clinic_service(db: AsyncIOMotorDatabase = Depends(get_db)) -> ClinicService:
    return ClinicService(db)
