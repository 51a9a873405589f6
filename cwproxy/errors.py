"""Errors raised by the proxy contracts."""

from __future__ import annotations

from typing import Any


class ContractError(Exception):
    """Base class for every error a contract call can raise."""

    default_message = "Contract error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(self.default_message if message is None else message)

    @property
    def message(self) -> str:
        return str(self.args[0])

    def __eq__(self, other: Any) -> bool:
        return type(self) is type(other) and self.args == other.args

    def __hash__(self) -> int:
        return hash((type(self), self.args))


class StdError(ContractError):
    """A failure in storage, address handling or arithmetic."""

    default_message = "Generic error"


class InvalidAddress(StdError):
    """An address did not pass validation."""

    default_message = "Invalid address"


class NotFound(StdError):
    """A stored value that must exist was missing."""

    default_message = "Not found"


class Overflow(StdError):
    """Arithmetic on token amounts left the allowed range."""

    default_message = "Overflow"


class Unauthorized(ContractError):
    default_message = "Unauthorized"


class ContractFrozen(ContractError):
    default_message = "Contract is frozen"


class CannotSetOwnAccount(ContractError):
    default_message = "Cannot set to own account"


class NoAllowance(ContractError):
    default_message = "No allowance for this account"


class SettingExpiredAllowance(ContractError):
    """An allowance was given an expiration that has already passed."""

    def __init__(self, expiration: Any) -> None:
        self.expiration = expiration
        super().__init__(f"Allowance already expired while setting: {expiration}")