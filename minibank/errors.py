"""
Banking Error Taxonomy

Domain errors for account construction, balance mutation and field
validation. Expected business failures are carried inside a Result rather
than raised; these classes are still proper exceptions so that
Result.unwrap() can raise them and callers can catch them by type.
"""

from typing import Dict, FrozenSet, List, Mapping


class BankingError(Exception):
    """Base class for all minibank errors"""


class ConstructionError(BankingError, ValueError):
    """Invalid initial state: negative balance, rate out of range, negative quota"""


class AmountError(BankingError, ValueError):
    """Missing, malformed or non-positive amount passed to deposit/withdraw"""


class InsufficientFundsError(BankingError):
    """Withdrawal exceeds the available balance"""


class QuotaExceededError(BankingError):
    """Savings withdrawal beyond the monthly free-withdrawal limit"""


class UnknownFieldError(BankingError, KeyError):
    """Validation requested for a field that has no rule set"""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message
        return str(self.args[0]) if self.args else ""


class ValidationFailed(BankingError):
    """
    One or more registration fields failed validation

    Carries every violation per field, not only the first one.
    """

    def __init__(self, violations: Mapping[str, FrozenSet[str]]):
        self.violations: Dict[str, FrozenSet[str]] = {
            field: frozenset(messages) for field, messages in violations.items()
        }
        fields = ", ".join(sorted(self.violations))
        super().__init__(f"Validation failed for: {fields}")

    @property
    def messages(self) -> List[str]:
        """All violation messages, sorted by field then message"""
        return [
            message
            for field in sorted(self.violations)
            for message in sorted(self.violations[field])
        ]
