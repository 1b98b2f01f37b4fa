"""
Domain entities. Built per request from stored (or mocked) state.
"""
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import List, Optional


@dataclass
class PetType:
    id: Optional[int] = None
    name: Optional[str] = None


@dataclass
class Owner:
    id: Optional[int] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    telephone: Optional[str] = None
    pets: List["Pet"] = field(default_factory=list)

    def add_pet(self, pet: "Pet") -> None:
        pet.owner = self
        self.pets.append(pet)

    def get_pet(self, pet_id: int) -> Optional["Pet"]:
        for pet in self.pets:
            if pet.id == pet_id:
                return pet
        return None


@dataclass
class Pet:
    name: str
    birth_date: date
    type: PetType
    id: Optional[int] = None
    # owner <-> pets is cyclic, keep it out of repr/eq
    owner: Optional[Owner] = field(default=None, repr=False, compare=False)
    weight: Optional[Decimal] = None
