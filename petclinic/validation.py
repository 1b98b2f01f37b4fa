"""
Field validation for the write-side transfer objects.

Each check is a plain function that returns a ``FieldViolation`` (or ``None``
when the value is fine). Controllers collect the violations and raise
``ValidationFailed`` before touching the clinic service.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, List, Optional

# DECIMAL(5,2) column: 0.00 .. 999.99 kg, both ends inclusive
WEIGHT_MIN = Decimal("0.00")
WEIGHT_MAX = Decimal("999.99")
WEIGHT_INTEGER_DIGITS = 3
WEIGHT_FRACTION_DIGITS = 2

PET_NAME_MAX_LENGTH = 30
OWNER_NAME_MAX_LENGTH = 30
TELEPHONE_MAX_LENGTH = 20


@dataclass(frozen=True)
class FieldViolation:
    """A single failed constraint on a single field."""

    field: str
    constraint: str
    message: str
    bound: Optional[Decimal] = None
    rejected_value: Any = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "field": self.field,
            "constraint": self.constraint,
            "bound": self.bound,
            "rejected_value": self.rejected_value,
            "message": self.message,
        }


def validate_weight(weight: Optional[Decimal], field: str = "weight") -> Optional[FieldViolation]:
    """
    Check a pet weight against the allowed range and precision.

    Args:
        weight: The weight in kilograms, or None when the pet has none
        field: Field name reported in the violation

    Returns:
        The first violated constraint, or None if the weight is acceptable
    """
    if weight is None:
        return None

    if weight < WEIGHT_MIN:
        return FieldViolation(
            field=field,
            constraint="DecimalMin",
            bound=WEIGHT_MIN,
            rejected_value=weight,
            message=f"must be greater than or equal to {WEIGHT_MIN}",
        )
    if weight > WEIGHT_MAX:
        return FieldViolation(
            field=field,
            constraint="DecimalMax",
            bound=WEIGHT_MAX,
            rejected_value=weight,
            message=f"must be less than or equal to {WEIGHT_MAX}",
        )

    exponent = weight.normalize().as_tuple().exponent
    fraction_digits = -exponent if exponent < 0 else 0
    if fraction_digits > WEIGHT_FRACTION_DIGITS:
        return FieldViolation(
            field=field,
            constraint="Digits",
            bound=Decimal(WEIGHT_FRACTION_DIGITS),
            rejected_value=weight,
            message=(
                f"numeric value out of bounds (<{WEIGHT_INTEGER_DIGITS} digits>."
                f"<{WEIGHT_FRACTION_DIGITS} digits> expected)"
            ),
        )
    return None


def validate_not_blank(value: Optional[str], field: str, max_length: int) -> Optional[FieldViolation]:
    if value is None or not value.strip():
        return FieldViolation(field=field, constraint="NotBlank", rejected_value=value,
                              message="must not be blank")
    if len(value) > max_length:
        return FieldViolation(field=field, constraint="Size", bound=Decimal(max_length),
                              rejected_value=value,
                              message=f"size must be between 1 and {max_length}")
    return None


def validate_telephone(value: Optional[str], field: str = "telephone") -> Optional[FieldViolation]:
    violation = validate_not_blank(value, field, TELEPHONE_MAX_LENGTH)
    if violation:
        return violation
    if not value.isdigit():
        return FieldViolation(field=field, constraint="Pattern", rejected_value=value,
                              message='must match "^[0-9]*$"')
    return None


def validate_pet_fields(dto) -> List[FieldViolation]:
    """Validates a PetFieldsDto or PetDto, returning every violation found."""
    checks = [
        validate_not_blank(dto.name, "name", PET_NAME_MAX_LENGTH),
        validate_weight(dto.weight),
    ]
    return [v for v in checks if v is not None]


def validate_owner_fields(dto) -> List[FieldViolation]:
    checks = [
        validate_not_blank(dto.first_name, "firstName", OWNER_NAME_MAX_LENGTH),
        validate_not_blank(dto.last_name, "lastName", OWNER_NAME_MAX_LENGTH),
        validate_not_blank(dto.address, "address", 255),
        validate_not_blank(dto.city, "city", 80),
        validate_telephone(dto.telephone),
    ]
    return [v for v in checks if v is not None]
