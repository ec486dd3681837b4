"""
Test suite for registration field validation

Every rule a value breaks must be reported, unknown fields fail fast, and
validation must not depend on anything but the field and the value.
"""

import pytest

from minibank.errors import UnknownFieldError
from minibank.validation import (
    FIELD_ORDER, FIELD_RULES, FieldRules, FieldValidator, length_between
)


@pytest.fixture
def validator():
    return FieldValidator()


class TestPin:
    """PIN: exactly 4 digits"""

    def test_valid_pin(self, validator):
        assert validator.validate("pin", "1234") == frozenset()

    @pytest.mark.parametrize("pin", ["12a4", "123", "12345", "abcd", "12 4"])
    def test_invalid_pin(self, validator, pin):
        assert validator.validate("pin", pin) == {"PIN must be exactly 4 digits"}

    def test_pin_is_trimmed(self, validator):
        assert validator.validate("pin", "  1234\n") == frozenset()

    def test_missing_pin(self, validator):
        assert validator.validate("pin", "") == {"PIN is required"}
        assert validator.validate("pin", None) == {"PIN is required"}


class TestPassword:
    """Password: 8+ characters with a digit, a lowercase and an uppercase letter"""

    def test_valid_password(self, validator):
        assert validator.validate("password", "Abcdef12") == frozenset()

    def test_missing_digit_and_uppercase(self, validator):
        assert validator.validate("password", "abcdefgh") == {
            "Password must include upper, lower, and a number"
        }

    def test_too_short_reports_every_violation(self, validator):
        assert validator.validate("password", "ab") == {
            "Password must be at least 8 characters",
            "Password must include upper, lower, and a number",
        }

    def test_short_but_well_formed(self, validator):
        assert validator.validate("password", "Ab1") == {
            "Password must be at least 8 characters"
        }

    def test_missing_lowercase(self, validator):
        assert validator.validate("password", "ABCDEF12") == {
            "Password must include upper, lower, and a number"
        }

    def test_symbols_allowed(self, validator):
        assert validator.is_valid("password", "P@ssw0rd!")


class TestIdNumber:
    """ID number: exactly 10 digits"""

    def test_valid(self, validator):
        assert validator.validate("id_number", "0123456789") == frozenset()

    def test_wrong_length(self, validator):
        assert validator.validate("id_number", "12345") == {
            "ID number must be exactly 10 digits"
        }

    def test_non_digits(self, validator):
        assert validator.validate("id_number", "12345abcde") == {
            "ID number must contain digits only"
        }

    def test_both_violations(self, validator):
        assert validator.validate("id_number", "12ab") == {
            "ID number must be exactly 10 digits",
            "ID number must contain digits only",
        }

    def test_blank(self, validator):
        assert validator.validate("id_number", "   ") == {"ID Number is required"}


class TestName:
    """Name: 2 to 50 characters"""

    @pytest.mark.parametrize("name", ["Al", "Jane Doe", "x" * 50])
    def test_valid(self, validator, name):
        assert validator.is_valid("name", name)

    @pytest.mark.parametrize("name", ["A", "x" * 51])
    def test_invalid_length(self, validator, name):
        assert validator.validate("name", name) == {
            "Name must be between 2 and 50 characters"
        }

    def test_surrounding_spaces_not_counted(self, validator):
        assert validator.validate("name", "  A  ") == {
            "Name must be between 2 and 50 characters"
        }


class TestEmail:
    """Email: local@domain with a dot-separated domain"""

    @pytest.mark.parametrize("email", [
        "jane.doe@example.com",
        "user+tag@mail.example.co.uk",
        "a_b-c@sub-domain.example.org",
    ])
    def test_valid(self, validator, email):
        assert validator.validate("email", email) == frozenset()

    @pytest.mark.parametrize("email", [
        "plainaddress",
        "a@b",
        "a@.com",
        "@example.com",
        "a@example.",
        "a b@example.com",
        "a@@example.com",
    ])
    def test_invalid(self, validator, email):
        assert validator.validate("email", email) == {"Email format is invalid"}

    def test_missing(self, validator):
        assert validator.validate("email", None) == {"Email is required"}


class TestUserId:
    """User ID: 3 to 20 letters, digits or underscores"""

    @pytest.mark.parametrize("user_id", ["abc", "john_doe_42", "A" * 20])
    def test_valid(self, validator, user_id):
        assert validator.is_valid("user_id", user_id)

    def test_too_short(self, validator):
        assert validator.validate("user_id", "ab") == {
            "User ID must be between 3 and 20 characters"
        }

    def test_bad_characters(self, validator):
        assert validator.validate("user_id", "john doe") == {
            "User ID can only contain letters, digits or underscore"
        }

    def test_too_long_and_bad_characters(self, validator):
        assert validator.validate("user_id", "john.doe." * 3) == {
            "User ID must be between 3 and 20 characters",
            "User ID can only contain letters, digits or underscore",
        }


class TestFieldValidator:
    """Validator-level behaviour"""

    def test_unknown_field_fails_fast(self, validator):
        with pytest.raises(UnknownFieldError, match="Unknown field: 'nickname'"):
            validator.validate("nickname", "value")

    def test_unknown_field_is_key_error(self, validator):
        with pytest.raises(KeyError):
            validator.validate("balance", "100")

    def test_camel_case_aliases(self, validator):
        assert validator.validate("idNumber", "12ab") == validator.validate("id_number", "12ab")
        assert validator.is_valid("userId", "john_doe")

    def test_non_string_value_rejected(self, validator):
        with pytest.raises(TypeError):
            validator.validate("pin", 1234)

    def test_deterministic(self, validator):
        first = validator.validate("password", "short")
        for _ in range(10):
            assert validator.validate("password", "short") == first
        assert FieldValidator().validate("password", "short") == first

    def test_validate_all_reports_failing_fields_only(self, validator):
        failures = validator.validate_all({
            "idNumber": "0123456789",
            "email": "not-an-email",
            "pin": "12",
        })

        assert failures == {
            "email": frozenset({"Email format is invalid"}),
            "pin": frozenset({"PIN must be exactly 4 digits"}),
        }

    def test_rules_for(self, validator):
        rules = validator.rules_for("pin")
        assert rules.label == "PIN"
        assert rules.required_message == "PIN is required"
        assert len(rules.rules) == 1

    def test_every_registration_field_has_rules(self):
        assert set(FIELD_ORDER) == set(FIELD_RULES)
        assert FIELD_ORDER[0] == "id_number"
        assert FIELD_ORDER[-1] == "pin"

    def test_rules_are_read_only(self):
        with pytest.raises(TypeError):
            FIELD_RULES["pin"] = None

    def test_custom_rule_set(self):
        validator = FieldValidator({
            "nickname": FieldRules(
                label="Nickname",
                required_message="Nickname is required",
                rules=(length_between(1, 5, "Nickname is too long"),),
            ),
        })

        assert validator.validate("nickname", "abcdefg") == {"Nickname is too long"}
        assert validator.validate("nickname", "") == {"Nickname is required"}
        with pytest.raises(UnknownFieldError):
            validator.validate("pin", "1234")

    def test_canonical_field(self, validator):
        assert validator.canonical_field("userId") == "user_id"
        assert validator.canonical_field("email") == "email"
        with pytest.raises(UnknownFieldError):
            validator.canonical_field("phone")

    def test_canonical_field_uses_own_rule_set(self):
        """Names resolve against the validator's rules, not the defaults"""
        validator = FieldValidator({
            "user_id": FIELD_RULES["user_id"],
            "nickname": FieldRules(label="Nickname", required_message="Nickname is required"),
        })

        assert validator.canonical_field("userId") == "user_id"
        assert validator.canonical_field("nickname") == "nickname"
        with pytest.raises(UnknownFieldError):
            validator.canonical_field("email")
