"""Use case to create user-scoped categories."""

import re

from wealth_ledger.application.ports.ledger_store import LedgerStorePort
from wealth_ledger.domain.errors import InvalidArgumentError, NotFoundError
from wealth_ledger.domain.models import Category
from wealth_ledger.infrastructure.logging.logger import get_app_logger

MAX_CATEGORY_NAME_LENGTH = 50
_COLOR_PATTERN = re.compile(r"^#[0-9a-fA-F]{6}$")


class CreateCategoryUseCase:
    """Create a category, nested at most one level deep."""

    def __init__(self, store: LedgerStorePort, logger=None) -> None:
        self._store = store
        self._logger = logger or get_app_logger()

    def execute(
        self,
        user_guid: str,
        name: str,
        parent_guid: str | None = None,
        color: str | None = None,
        icon: str | None = None,
    ) -> Category:
        """Create a category for a user.

        Args:
            user_guid: Owner of the category.
            name: Display name.
            parent_guid: Optional top-level category of the same user.
            color: Optional ``#rrggbb`` colour.
            icon: Optional icon name.

        Returns:
            Category: The stored category.

        Raises:
            InvalidArgumentError: On a blank or long name, a malformed colour,
                a parent of another user or a parent that is itself nested.
            NotFoundError: If the user or parent does not exist.
        """
        cleaned = (name or "").strip()
        if not cleaned or len(cleaned) > MAX_CATEGORY_NAME_LENGTH:
            raise InvalidArgumentError(f"Invalid category name: {name!r}")
        if color is not None and not _COLOR_PATTERN.match(color):
            raise InvalidArgumentError(f"Invalid category colour: {color!r}")

        with self._store.atomic() as session:
            if session.get_user(user_guid) is None:
                raise NotFoundError("User", user_guid)
            if parent_guid is not None:
                parent = session.get_category(parent_guid)
                if parent is None:
                    raise NotFoundError("Category", parent_guid)
                if parent.user_guid != user_guid:
                    raise InvalidArgumentError(
                        f"Parent category {parent_guid} belongs to another user"
                    )
                if parent.parent_guid is not None:
                    raise InvalidArgumentError(
                        "Categories can only be nested one level deep"
                    )
            category = session.add_category(
                user_guid,
                cleaned,
                parent_guid,
                color,
                (icon or "").strip() or None,
            )
        self._logger.info(f"Created category {category.guid} for user {user_guid}")
        return category


__all__ = ["CreateCategoryUseCase"]
