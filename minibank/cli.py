"""
Registration Console

Interactive harness that prompts for each registration field, re-prompting
until the validator accepts the value, then prints the new user with the
password and PIN masked.
"""

from typing import Callable, List, Optional
import argparse
import sys

from .config import get_config
from .errors import ValidationFailed
from .logging_config import get_logger, setup_logging
from .users import UserRecord
from .validation import FIELD_ORDER, FieldValidator

logger = get_logger(__name__)

PROMPTS = {
    "id_number": "ID Number is required: ",
    "name": "Name is required: ",
    "email": "Email is required: ",
    "password": "Password is required: ",
    "user_id": "User ID is required: ",
    "pin": "PIN is required: ",
}


def prompt_for_field(
    field_name: str,
    prompt: str,
    validator: FieldValidator,
    read: Optional[Callable[[str], str]] = None,
    write: Optional[Callable[[str], None]] = None,
    max_attempts: Optional[int] = None
) -> str:
    """
    Read values until one passes validation

    Args:
        field_name: Field being collected
        prompt: Text passed to ``read``
        validator: Validator checking each attempt
        read: Line reader, ``input`` by default
        write: Line writer for violation messages, ``print`` by default
        max_attempts: Give up after this many rejected attempts (None = never)

    Returns:
        The first accepted value, trimmed

    Raises:
        ValidationFailed: If max_attempts is exhausted
        EOFError: If the reader runs out of input
    """
    read = read or input
    write = write or print

    attempts = 0
    while True:
        value = read(prompt).strip()
        violations = validator.validate(field_name, value)
        if not violations:
            return value

        for message in sorted(violations):
            write(message)

        attempts += 1
        logger.debug(f"Attempt {attempts} for {field_name} rejected")
        if max_attempts is not None and attempts >= max_attempts:
            raise ValidationFailed({field_name: violations})


def register_user(
    validator: Optional[FieldValidator] = None,
    read: Optional[Callable[[str], str]] = None,
    write: Optional[Callable[[str], None]] = None,
    max_attempts: Optional[int] = None
) -> UserRecord:
    """Collect every field in registration order and print the new user"""
    write = write or print
    validator = validator or FieldValidator()
    user = UserRecord()

    for field_name in FIELD_ORDER:
        value = prompt_for_field(
            field_name, PROMPTS[field_name], validator,
            read=read, write=write, max_attempts=max_attempts
        )
        user.set_field(field_name, value)

    write("\n=== New User Created ===")
    write(str(user))
    logger.info("User registered", extra={"extra": {"user_id": user.user_id}})
    return user


def positive_int(text: str) -> int:
    """argparse type for counts that must be at least 1"""
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {text!r}") from None
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {value}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="minibank",
        description="Register a new banking user interactively.",
    )
    parser.add_argument("--log-level", type=str.upper,
                        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
                        help="Override MINIBANK_LOG_LEVEL")
    parser.add_argument("--log-format", choices=["json", "text"],
                        help="Override MINIBANK_LOG_FORMAT")
    parser.add_argument("--max-attempts", type=positive_int,
                        help="Give up on a field after this many invalid entries")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    config = get_config()

    setup_logging(
        level=args.log_level or config.log_level,
        log_format=args.log_format or config.log_format,
        log_file=config.log_file,
    )
    max_attempts = (
        args.max_attempts if args.max_attempts is not None
        else config.max_prompt_attempts
    )

    try:
        register_user(max_attempts=max_attempts)
    except (EOFError, KeyboardInterrupt):
        print("\nRegistration cancelled.", file=sys.stderr)
        return 130
    except ValidationFailed as e:
        print(f"\n{e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
