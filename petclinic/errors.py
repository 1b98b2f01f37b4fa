from typing import List, Optional

from .validation import FieldViolation


class PetClinicError(Exception):
    """Base for errors the exception advice turns into HTTP responses."""
    status_code = 500
    title = "Internal Server Error"

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(detail)


class ValidationFailed(PetClinicError):
    status_code = 400
    title = "Validation failed"

    def __init__(self, violations: List[FieldViolation], detail: Optional[str] = None):
        self.violations = list(violations)
        if detail is None:
            detail = "; ".join(v.message for v in self.violations) or "Request validation failed"
        super().__init__(detail)


class NotFoundError(PetClinicError):
    status_code = 404
    title = "Not Found"

    def __init__(self, resource: str, resource_id: int):
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(f"{resource} {resource_id} not found")


class DataIntegrityError(PetClinicError):
    """A stored record cannot be turned into a valid entity."""
    status_code = 500
    title = "Data integrity violation"

    def __init__(self, resource: str, resource_id: int, problem: str):
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(f"{resource} {resource_id}: {problem}")


class OwnershipMismatch(PetClinicError):
    status_code = 400
    title = "Bad Request"

    def __init__(self, owner_id: int, pet_id: int):
        self.owner_id = owner_id
        self.pet_id = pet_id
        super().__init__(f"Pet {pet_id} does not belong to owner {owner_id}")
