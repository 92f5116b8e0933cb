"""Use cases to register users and open or deactivate accounts."""

from wealth_ledger.application.ports.ledger_store import LedgerStorePort
from wealth_ledger.domain.constants import DEFAULT_CURRENCY, AccountType
from wealth_ledger.domain.errors import InvalidArgumentError, NotFoundError
from wealth_ledger.domain.models import Account, User
from wealth_ledger.domain.policies.account_names import is_valid_account_name
from wealth_ledger.domain.services.normalization import normalize_currency
from wealth_ledger.infrastructure.logging.logger import get_app_logger


def parse_account_type(value) -> AccountType:
    """Return ``value`` as an AccountType.

    Raises:
        InvalidArgumentError: If the value is not a known type.
    """
    try:
        return AccountType(value)
    except ValueError:
        raise InvalidArgumentError(f"Unknown account type: {value!r}") from None


class RegisterUserUseCase:
    """Create the owner of accounts, categories, budgets and goals."""

    def __init__(self, store: LedgerStorePort, logger=None) -> None:
        self._store = store
        self._logger = logger or get_app_logger()

    def execute(self, email: str, name: str | None = None) -> User:
        """Create a user.

        Args:
            email: Unique e-mail address, stored lower-case.
            name: Optional display name.

        Returns:
            User: The stored user.

        Raises:
            InvalidArgumentError: If the e-mail address is malformed.
            AtomicityFailureError: If the address is already registered.
        """
        cleaned = (email or "").strip().lower()
        if "@" not in cleaned or cleaned.startswith("@") or cleaned.endswith("@"):
            raise InvalidArgumentError(f"Invalid e-mail address: {email!r}")
        with self._store.atomic() as session:
            user = session.add_user(cleaned, (name or "").strip() or None)
        self._logger.info(f"Registered user {user.guid}")
        return user


class OpenAccountUseCase:
    """Open a cash account with a zero balance."""

    def __init__(
        self,
        store: LedgerStorePort,
        logger=None,
        default_currency: str = DEFAULT_CURRENCY,
    ) -> None:
        """Initialize the use case.

        Args:
            store: Port providing atomic units over the ledger.
            logger: Optional logger compatible with logging.Logger-like API.
            default_currency: Currency used when none is given.
        """
        self._store = store
        self._logger = logger or get_app_logger()
        self._default_currency = default_currency

    def execute(
        self,
        user_guid: str,
        name: str,
        account_type,
        currency_code: str | None = None,
    ) -> Account:
        """Open an account for a user.

        Args:
            user_guid: Owner of the account.
            name: Display name.
            account_type: AccountType or its string value.
            currency_code: Optional currency; defaults to the configured one.

        Returns:
            Account: The stored account, balance 0 and active.

        Raises:
            InvalidArgumentError: On an invalid name, type or currency.
            NotFoundError: If the user does not exist.
        """
        if not is_valid_account_name(name or ""):
            raise InvalidArgumentError(f"Invalid account name: {name!r}")
        kind = parse_account_type(account_type)
        currency = normalize_currency(currency_code, self._default_currency)
        if len(currency) != 3 or not currency.isalpha():
            raise InvalidArgumentError(f"Invalid currency code: {currency_code!r}")

        with self._store.atomic() as session:
            if session.get_user(user_guid) is None:
                raise NotFoundError("User", user_guid)
            account = session.add_account(user_guid, name.strip(), kind, currency)
        self._logger.info(
            f"Opened {kind.value} account {account.guid} ({currency}) "
            f"for user {user_guid}"
        )
        return account


class DeactivateAccountUseCase:
    """Soft-disable an account; its journal and balance stay untouched."""

    def __init__(self, store: LedgerStorePort, logger=None) -> None:
        self._store = store
        self._logger = logger or get_app_logger()

    def execute(self, account_guid: str, is_active: bool = False) -> Account:
        """Set the active flag of an account.

        Raises:
            NotFoundError: If the account does not exist.
        """
        with self._store.atomic() as session:
            account = session.set_account_active(account_guid, is_active)
            if account is None:
                raise NotFoundError("Account", account_guid)
        state = "active" if is_active else "inactive"
        self._logger.info(f"Account {account_guid} marked {state}")
        return account


__all__ = [
    "RegisterUserUseCase",
    "OpenAccountUseCase",
    "DeactivateAccountUseCase",
    "parse_account_type",
]
