"""Domain policies package."""

from .account_names import is_valid_account_name

__all__ = ["is_valid_account_name"]
