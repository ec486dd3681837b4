"""
minibank

Bank accounts with exact Decimal balances, savings accounts with monthly
interest and a free-withdrawal quota, and validated user registration.
"""

from .accounts import Account, BankAccount, SavingsAccount
from .errors import (
    AmountError, BankingError, ConstructionError, InsufficientFundsError,
    QuotaExceededError, UnknownFieldError, ValidationFailed
)
from .results import Result
from .users import UserRecord
from .validation import FIELD_ORDER, FieldValidator

__version__ = "1.0.0"
