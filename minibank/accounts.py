"""
Account Management Module

Bank accounts holding a non-negative Decimal balance, and savings accounts
that add monthly interest accrual and a cap on free withdrawals per period.

Every fallible operation returns a Result instead of raising; a rejected
operation leaves the account exactly as it was.
"""

from abc import ABC, abstractmethod
from decimal import Decimal, DecimalException
from typing import Any, Optional
import logging
import uuid

from .amounts import (
    MONEY_PRECISION, ZERO, exact_add, exact_subtract, monthly_interest,
    round_money, to_decimal
)
from .errors import (
    AmountError, BankingError, ConstructionError, InsufficientFundsError,
    QuotaExceededError
)
from .results import Result

logger = logging.getLogger(__name__)


def _parse_amount(amount: Any, operation: str) -> Result[Decimal]:
    """Validate an amount for deposit/withdraw: present, numeric, positive"""
    if amount is None:
        return Result.failure(AmountError(f"Amount for {operation} cannot be None."))
    try:
        value = to_decimal(amount)
    except (TypeError, ValueError) as e:
        return Result.failure(AmountError(f"Invalid amount for {operation}: {e}"))
    if value <= ZERO:
        return Result.failure(
            AmountError(f"Amount for {operation} must be greater than zero.")
        )
    return Result.success(value)


def _precision_error(operation: str) -> AmountError:
    return AmountError(
        f"Balance after {operation} would need more than "
        f"{MONEY_PRECISION} significant digits."
    )


def _log_rejection(account_id: str, operation: str, error: BankingError) -> None:
    logger.debug(
        f"{operation} rejected on account {account_id}: {error}",
        extra={"extra": {
            "account_id": account_id,
            "operation": operation,
            "error": type(error).__name__,
        }}
    )


class BankAccount(ABC):
    """
    Account capability shared by every account kind

    Identity is the account id alone: two accounts are equal iff their ids
    are equal, whatever their balances.
    """

    @property
    @abstractmethod
    def account_id(self) -> str:
        """Unique, immutable account identifier"""

    @property
    @abstractmethod
    def balance(self) -> Decimal:
        """Current balance, never negative"""

    @abstractmethod
    def deposit(self, amount: Any) -> Result[Decimal]:
        """Add a positive amount; the result carries the new balance"""

    @abstractmethod
    def withdraw(self, amount: Any) -> Result[Decimal]:
        """Remove a positive amount not exceeding the balance"""

    def __eq__(self, other) -> bool:
        if self is other:
            return True
        if not isinstance(other, BankAccount):
            return NotImplemented
        return self.account_id == other.account_id

    def __hash__(self) -> int:
        return hash(self.account_id)


class Account(BankAccount):
    """
    Plain bank account

    Created with a zero balance, or an explicit non-negative initial
    balance. Mutated only through deposit and withdraw.
    """

    def __init__(self, initial_balance: Any = None, account_id: Optional[str] = None):
        """
        Args:
            initial_balance: Starting balance; None means 0
            account_id: Explicit identifier (a UUID4 is generated if omitted)

        Raises:
            ConstructionError: If the balance is negative or not a number,
                or the identifier is empty
        """
        if account_id is None:
            account_id = str(uuid.uuid4())
        elif not isinstance(account_id, str) or not account_id.strip():
            raise ConstructionError("Account ID must be a non-empty string.")

        if initial_balance is None:
            balance = ZERO
        else:
            try:
                balance = to_decimal(initial_balance)
            except (TypeError, ValueError) as e:
                raise ConstructionError(f"Invalid initial funds: {e}") from e
            if balance < ZERO:
                raise ConstructionError("Initial funds cannot be negative.")
            # normalise Decimal("-0")
            balance = abs(balance) if balance == ZERO else balance

        self._account_id = account_id
        self._balance = balance

    @classmethod
    def open(cls, initial_balance: Any = None,
             account_id: Optional[str] = None) -> Result["Account"]:
        """Create an account, reporting construction errors as a Result"""
        try:
            return Result.success(cls(initial_balance, account_id=account_id))
        except ConstructionError as e:
            return Result.failure(e)

    @property
    def account_id(self) -> str:
        return self._account_id

    @property
    def balance(self) -> Decimal:
        return self._balance

    def deposit(self, amount: Any) -> Result[Decimal]:
        parsed = _parse_amount(amount, "deposit")
        if not parsed:
            _log_rejection(self._account_id, "deposit", parsed.error)
            return parsed

        try:
            new_balance = exact_add(self._balance, parsed.value)
        except DecimalException:
            error = _precision_error("deposit")
            _log_rejection(self._account_id, "deposit", error)
            return Result.failure(error)

        self._balance = new_balance
        return Result.success(self._balance)

    def withdraw(self, amount: Any) -> Result[Decimal]:
        parsed = _parse_amount(amount, "withdraw")
        if not parsed:
            _log_rejection(self._account_id, "withdraw", parsed.error)
            return parsed

        if parsed.value > self._balance:
            error = InsufficientFundsError(
                f"Insufficient funds for withdrawal: balance {self._balance}, "
                f"requested {parsed.value}."
            )
            _log_rejection(self._account_id, "withdraw", error)
            return Result.failure(error)

        try:
            new_balance = exact_subtract(self._balance, parsed.value)
        except DecimalException:
            error = _precision_error("withdraw")
            _log_rejection(self._account_id, "withdraw", error)
            return Result.failure(error)

        self._balance = new_balance
        return Result.success(self._balance)

    def __repr__(self) -> str:
        return f"Account(id='{self._account_id}', balance={self._balance})"


class SavingsAccount(BankAccount):
    """
    Savings account with monthly interest and a free-withdrawal quota

    Owns a plain Account for the balance arithmetic; withdrawals are
    checked against the quota before being delegated to it. The counter
    only moves on a withdrawal that actually succeeded.
    """

    def __init__(
        self,
        initial_balance: Any,
        annual_interest_rate: Any,
        max_monthly_withdrawals: int,
        account_id: Optional[str] = None
    ):
        """
        Args:
            initial_balance: Starting balance; None means 0
            annual_interest_rate: Annual rate as a decimal, e.g. 0.05 for 5%
            max_monthly_withdrawals: Free withdrawals per period, >= 0
            account_id: Explicit identifier (generated if omitted)

        Raises:
            ConstructionError: On a negative balance, a rate outside [0, 1]
                or a negative quota
        """
        self._account = Account(initial_balance, account_id=account_id)

        try:
            rate = to_decimal(annual_interest_rate)
        except (TypeError, ValueError):
            rate = None
        if rate is None or rate < ZERO or rate > Decimal("1"):
            raise ConstructionError("Interest rate must be between 0 and 1 (inclusive).")

        if isinstance(max_monthly_withdrawals, bool) or not isinstance(max_monthly_withdrawals, int):
            raise ConstructionError("Max monthly withdrawals must be an integer.")
        if max_monthly_withdrawals < 0:
            raise ConstructionError("Max monthly withdrawals cannot be negative.")

        self._annual_interest_rate = rate
        self._max_monthly_withdrawals = max_monthly_withdrawals
        self._withdrawals_this_period = 0

    @classmethod
    def open(
        cls,
        initial_balance: Any,
        annual_interest_rate: Any,
        max_monthly_withdrawals: int,
        account_id: Optional[str] = None
    ) -> Result["SavingsAccount"]:
        """Create a savings account, reporting construction errors as a Result"""
        try:
            return Result.success(cls(
                initial_balance, annual_interest_rate, max_monthly_withdrawals,
                account_id=account_id
            ))
        except ConstructionError as e:
            return Result.failure(e)

    @property
    def account_id(self) -> str:
        return self._account.account_id

    @property
    def balance(self) -> Decimal:
        return self._account.balance

    @property
    def annual_interest_rate(self) -> Decimal:
        return self._annual_interest_rate

    @property
    def max_monthly_withdrawals(self) -> int:
        return self._max_monthly_withdrawals

    @property
    def withdrawals_this_period(self) -> int:
        return self._withdrawals_this_period

    @property
    def remaining_withdrawals(self) -> int:
        return self._max_monthly_withdrawals - self._withdrawals_this_period

    def deposit(self, amount: Any) -> Result[Decimal]:
        return self._account.deposit(amount)

    def withdraw(self, amount: Any) -> Result[Decimal]:
        if self._withdrawals_this_period >= self._max_monthly_withdrawals:
            error = QuotaExceededError(
                f"Monthly free-withdrawal limit exceeded "
                f"({self._max_monthly_withdrawals} per period)."
            )
            _log_rejection(self.account_id, "withdraw", error)
            return Result.failure(error)

        result = self._account.withdraw(amount)
        if result:
            self._withdrawals_this_period += 1
        return result

    def accrue_monthly_interest(self) -> Result[Decimal]:
        """
        Apply one month of interest to the balance

        interest = balance * (annual rate / 12), the monthly rate carried to
        10 places and the interest rounded half up to cents. The interest
        goes through the normal deposit path. Zero interest (a zero balance
        or a zero rate) is skipped without a deposit.

        A balance too large for the interest to be credited exactly yields
        an AmountError and is left unchanged.

        Returns:
            Result carrying the interest credited
        """
        try:
            interest = monthly_interest(self.balance, self._annual_interest_rate)
        except DecimalException:
            error = _precision_error("interest accrual")
            _log_rejection(self.account_id, "accrual", error)
            return Result.failure(error)
        if interest <= ZERO:
            logger.debug(f"No interest accrued on account {self.account_id}")
            return Result.success(round_money(ZERO))

        result = self._account.deposit(interest)
        if not result:
            return Result.failure(result.error)

        logger.info(
            f"Accrued interest {interest} on account {self.account_id}",
            extra={"extra": {
                "account_id": self.account_id,
                "interest": str(interest),
                "balance": str(self.balance),
            }}
        )
        return Result.success(interest)

    def reset_withdrawal_count(self) -> None:
        """Start a new period: the withdrawal counter goes back to zero"""
        self._withdrawals_this_period = 0

    def __repr__(self) -> str:
        return (
            f"SavingsAccount(id='{self.account_id}', balance={self.balance}, "
            f"rate={self._annual_interest_rate}, withdrawals="
            f"{self._withdrawals_this_period}/{self._max_monthly_withdrawals})"
        )
