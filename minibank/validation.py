"""
Registration Field Validation

Declarative rule sets for the user registration fields and a stateless
validator that checks one field at a time. Each rule carries its own
message, and validation reports every rule a value breaks, not just the
first one.

Values are trimmed before checking. Validation never looks at other
fields and never touches external state, so the same input always yields
the same violations.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Dict, FrozenSet, Mapping, Optional, Tuple
import logging
import re

from .errors import UnknownFieldError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Rule:
    """A single check on a trimmed, non-empty value"""
    message: str
    check: Callable[[str], bool]

    def is_satisfied_by(self, value: str) -> bool:
        return self.check(value)


@dataclass(frozen=True)
class FieldRules:
    """
    Rule set for one field

    ``required_message`` is reported for a missing or blank value; in that
    case the remaining rules are not evaluated.
    """
    label: str
    required_message: str
    rules: Tuple[Rule, ...] = ()


def length_between(min_length: int, max_length: Optional[int], message: str) -> Rule:
    """Rule: value length within [min_length, max_length] (no upper bound if None)"""
    def check(value: str) -> bool:
        if len(value) < min_length:
            return False
        return max_length is None or len(value) <= max_length
    return Rule(message=message, check=check)


def matches(pattern: str, message: str, flags: int = 0) -> Rule:
    """Rule: the whole value matches the regular expression"""
    compiled = re.compile(pattern, flags)
    return Rule(message=message, check=lambda value: compiled.fullmatch(value) is not None)


EMAIL_PATTERN = (
    r"[A-Za-z0-9._%+-]+"
    r"@(?:[A-Za-z0-9](?:[A-Za-z0-9-]*[A-Za-z0-9])?\.)+[A-Za-z]{2,}"
)

# Registration order used by the prompting harness
FIELD_ORDER: Tuple[str, ...] = ("id_number", "name", "email", "password", "user_id", "pin")

FIELD_ALIASES = MappingProxyType({
    "idNumber": "id_number",
    "userId": "user_id",
})

FIELD_RULES: Mapping[str, FieldRules] = MappingProxyType({
    "id_number": FieldRules(
        label="ID Number",
        required_message="ID Number is required",
        rules=(
            length_between(10, 10, "ID number must be exactly 10 digits"),
            matches(r"[0-9]+", "ID number must contain digits only"),
        ),
    ),
    "name": FieldRules(
        label="Name",
        required_message="Name is required",
        rules=(
            length_between(2, 50, "Name must be between 2 and 50 characters"),
        ),
    ),
    "email": FieldRules(
        label="Email",
        required_message="Email is required",
        rules=(
            matches(EMAIL_PATTERN, "Email format is invalid"),
        ),
    ),
    "password": FieldRules(
        label="Password",
        required_message="Password is required",
        rules=(
            length_between(8, None, "Password must be at least 8 characters"),
            matches(
                r"(?=.*[0-9])(?=.*[a-z])(?=.*[A-Z]).+",
                "Password must include upper, lower, and a number",
                re.DOTALL,
            ),
        ),
    ),
    "user_id": FieldRules(
        label="User ID",
        required_message="User ID is required",
        rules=(
            length_between(3, 20, "User ID must be between 3 and 20 characters"),
            matches(r"[A-Za-z0-9_]+", "User ID can only contain letters, digits or underscore"),
        ),
    ),
    "pin": FieldRules(
        label="PIN",
        required_message="PIN is required",
        rules=(
            matches(r"[0-9]{4}", "PIN must be exactly 4 digits"),
        ),
    ),
})


class FieldValidator:
    """
    Stateless validator for registration fields

    Instantiate one wherever it is needed; a custom rule mapping can be
    supplied, otherwise FIELD_RULES is used.
    """

    def __init__(self, rules: Optional[Mapping[str, FieldRules]] = None):
        self._rules = FIELD_RULES if rules is None else MappingProxyType(dict(rules))

    def canonical_field(self, field_name: str) -> str:
        """
        Resolve a field name or its camelCase alias

        Raises:
            UnknownFieldError: If this validator has no rule set for the name
        """
        name = FIELD_ALIASES.get(field_name, field_name)
        if name not in self._rules:
            raise UnknownFieldError(f"Unknown field: {field_name!r}")
        return name

    def rules_for(self, field_name: str) -> FieldRules:
        """Rule set for a field"""
        return self._rules[self.canonical_field(field_name)]

    def validate(self, field_name: str, value: Optional[str]) -> FrozenSet[str]:
        """
        Check a raw value against a field's rules

        Args:
            field_name: Field name (snake_case or camelCase alias)
            value: Raw input; trimmed before checking

        Returns:
            Violation messages; empty means the value is accepted

        Raises:
            UnknownFieldError: If the field has no rule set
            TypeError: If value is neither a string nor None
        """
        field_rules = self.rules_for(field_name)

        if value is not None and not isinstance(value, str):
            raise TypeError(f"Expected a string for {field_name}, got {type(value).__name__}")

        text = value.strip() if value is not None else ""
        if not text:
            violations = frozenset({field_rules.required_message})
        else:
            violations = frozenset(
                rule.message for rule in field_rules.rules
                if not rule.is_satisfied_by(text)
            )

        if violations:
            # Never log the value itself; it may be a password or PIN
            logger.debug(f"{field_rules.label} rejected with {len(violations)} violation(s)")
        return violations

    def is_valid(self, field_name: str, value: Optional[str]) -> bool:
        return not self.validate(field_name, value)

    def validate_all(self, values: Mapping[str, Optional[str]]) -> Dict[str, FrozenSet[str]]:
        """
        Validate several fields independently

        Returns:
            Mapping of canonical field name to violations, failing fields only
        """
        failures = {}
        for field_name, value in values.items():
            violations = self.validate(field_name, value)
            if violations:
                failures[self.canonical_field(field_name)] = violations
        return failures
