"""
User Registration Record

Passive holder for the six registration fields. The rules each field must
satisfy live in the validation module; this record only stores accepted
values and renders them with the password and PIN masked.
"""

from dataclasses import dataclass
from typing import List, Mapping, Optional

from .errors import ValidationFailed
from .results import Result
from .validation import FIELD_ORDER, FieldValidator

PASSWORD_MASK = "*****"
PIN_MASK = "****"


def _mask(value: Optional[str], marker: str) -> str:
    # Fixed-length marker so the secret's length is not revealed
    return marker if value else ""


@dataclass(repr=False)
class UserRecord:
    """Registration payload for a new user"""
    id_number: Optional[str] = None
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    user_id: Optional[str] = None
    pin: Optional[str] = None

    @classmethod
    def from_fields(
        cls,
        values: Mapping[str, Optional[str]],
        validator: Optional[FieldValidator] = None
    ) -> Result["UserRecord"]:
        """
        Build a record from raw values, validating every field

        Fields absent from ``values`` are validated as missing. Accepted
        values are stored trimmed.

        Args:
            values: Raw values keyed by field name or camelCase alias
            validator: Validator whose rules and field names apply (a
                default one if omitted); it must cover all six fields

        Returns:
            Result carrying the record, or ValidationFailed with the
            violations of every failing field

        Raises:
            UnknownFieldError: If a key or a record field is unknown to the
                validator
        """
        validator = validator or FieldValidator()
        raw = {validator.canonical_field(name): value for name, value in values.items()}
        candidate = {name: raw.get(name) for name in FIELD_ORDER}

        failures = validator.validate_all(candidate)
        if failures:
            return Result.failure(ValidationFailed(failures))
        return Result.success(cls(**{name: value.strip() for name, value in candidate.items()}))

    def set_field(self, field_name: str, value: Optional[str]) -> None:
        """Set a field by name or camelCase alias"""
        setattr(self, FieldValidator().canonical_field(field_name), value)

    def get_field(self, field_name: str) -> Optional[str]:
        return getattr(self, FieldValidator().canonical_field(field_name))

    def missing_fields(self) -> List[str]:
        """Fields not yet populated, in registration order"""
        return [name for name in FIELD_ORDER if not getattr(self, name)]

    @property
    def is_complete(self) -> bool:
        return not self.missing_fields()

    def __repr__(self) -> str:
        return (
            f"UserRecord {{id_number={self.id_number}, name={self.name}, "
            f"email={self.email}, user_id={self.user_id}, "
            f"password={_mask(self.password, PASSWORD_MASK)}, "
            f"pin={_mask(self.pin, PIN_MASK)}}}"
        )
