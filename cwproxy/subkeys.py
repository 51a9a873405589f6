"""A proxy contract where admins grant other accounts limited spending and staking rights."""

from __future__ import annotations

from dataclasses import replace
from itertools import islice
from typing import Any, Iterable, Iterator

from .chain import (
    BankSend,
    Coin,
    Delegate,
    Env,
    Expiration,
    Redelegate,
    Response,
    SetWithdrawAddress,
    Undelegate,
    WithdrawDelegatorReward,
    validate_address,
)
from .errors import (
    CannotSetOwnAccount,
    NoAllowance,
    NotFound,
    Overflow,
    SettingExpiredAllowance,
    Unauthorized,
)
from .state import (
    AdminListResponse,
    AllAllowancesResponse,
    Allowance,
    AllowanceInfo,
    AllPermissionsResponse,
    Permissions,
    PermissionsInfo,
)
from .whitelist import WhitelistContract

CONTRACT_NAME = "cw1-subkeys"
CONTRACT_VERSION = "0.1.0"

MAX_LIMIT = 30
DEFAULT_LIMIT = 10


def _calc_limit(limit: int | None) -> int:
    return min(DEFAULT_LIMIT if limit is None else limit, MAX_LIMIT)


def _keys_after(keys: Iterable[str], start_after: str | None) -> Iterator[str]:
    for key in sorted(keys):
        if start_after is None or key > start_after:
            yield key


class SubkeysContract:
    """Admins may execute anything; other accounts only within their allowance and permissions."""

    def __init__(self) -> None:
        self._whitelist = WhitelistContract()
        self._permissions: dict[str, Permissions] = {}
        self._allowances: dict[str, Allowance] = {}
        self._version: tuple[str, str] | None = None

    def instantiate(self, sender: str, admins: Iterable[str], mutable: bool) -> Response:
        """Set up the admin set and record the contract version."""
        result = self._whitelist.instantiate(sender, admins, mutable)
        self._version = (CONTRACT_NAME, CONTRACT_VERSION)
        return result

    def contract_version(self) -> tuple[str, str]:
        """The stored contract name and version."""
        if self._version is None:
            raise NotFound("contract info not found")
        return self._version

    def _check_spender(self, sender: str, spender: str) -> str:
        if not self._whitelist.is_admin(sender):
            raise Unauthorized()
        spender = validate_address(spender)
        if sender == spender:
            raise CannotSetOwnAccount()
        return spender

    def increase_allowance(
        self,
        env: Env,
        sender: str,
        spender: str,
        amount: Coin,
        expires: Expiration | None = None,
    ) -> Response:
        """Add coins to a spender's allowance, optionally resetting its expiration."""
        spender = self._check_spender(sender, spender)
        block = env.block

        current = self._allowances.get(spender)
        prev_expires = current.expires if current is not None else Expiration.never()
        allowance = (
            current
            if current is not None and not current.expires.is_expired(block)
            else Allowance()
        )

        if expires is not None:
            if expires.is_expired(block):
                raise SettingExpiredAllowance(expires)
            allowance = replace(allowance, expires=expires)
        elif prev_expires.is_expired(block):
            raise SettingExpiredAllowance(prev_expires)

        allowance = replace(allowance, balance=allowance.balance + amount)
        self._allowances[spender] = allowance

        return (
            Response()
            .add_attribute("action", "increase_allowance")
            .add_attribute("owner", sender)
            .add_attribute("spender", spender)
            .add_attribute("denomination", amount.denom)
            .add_attribute("amount", amount.amount)
        )

    def decrease_allowance(
        self,
        env: Env,
        sender: str,
        spender: str,
        amount: Coin,
        expires: Expiration | None = None,
    ) -> Response:
        """Take coins from a spender's allowance, removing it once nothing is left."""
        spender = self._check_spender(sender, spender)
        block = env.block

        allowance = self._allowances.get(spender)
        if allowance is None or allowance.expires.is_expired(block):
            raise NoAllowance()

        if expires is not None:
            if expires.is_expired(block):
                raise SettingExpiredAllowance(expires)
            allowance = replace(allowance, expires=expires)

        # Amounts above the balance are tolerated; a missing denomination is not.
        allowance = replace(allowance, balance=allowance.balance.sub_saturating(amount))

        if allowance.balance.is_empty():
            self._allowances.pop(spender, None)
        else:
            self._allowances[spender] = allowance

        return (
            Response()
            .add_attribute("action", "decrease_allowance")
            .add_attribute("owner", sender)
            .add_attribute("spender", spender)
            .add_attribute("denomination", amount.denom)
            .add_attribute("amount", amount.amount)
        )

    def set_permissions(self, sender: str, spender: str, permissions: Permissions) -> Response:
        """Replace the staking permissions of a spender."""
        spender = self._check_spender(sender, spender)
        self._permissions[spender] = permissions
        return (
            Response()
            .add_attribute("action", "set_permissions")
            .add_attribute("owner", sender)
            .add_attribute("spender", spender)
            .add_attribute("permissions", str(permissions))
        )

    def allowance(self, env: Env, spender: str) -> Allowance:
        """The spender's live allowance, or an empty one."""
        allowance = self._allowances.get(spender)
        if allowance is None or allowance.expires.is_expired(env.block):
            return Allowance()
        return allowance

    def permissions(self, spender: str) -> Permissions:
        """The spender's permissions, or none at all."""
        return self._permissions.get(spender, Permissions())

    def all_allowances(
        self, env: Env, start_after: str | None = None, limit: int | None = None
    ) -> AllAllowancesResponse:
        """Live allowances in spender order, one page at a time."""
        live = (
            (spender, self._allowances[spender])
            for spender in _keys_after(self._allowances, start_after)
            if not self._allowances[spender].expires.is_expired(env.block)
        )
        items = [
            AllowanceInfo(spender, allow.balance, allow.expires)
            for spender, allow in islice(live, _calc_limit(limit))
        ]
        return AllAllowancesResponse(items)

    def all_permissions(
        self, start_after: str | None = None, limit: int | None = None
    ) -> AllPermissionsResponse:
        """Stored permissions in spender order, one page at a time."""
        keys = islice(_keys_after(self._permissions, start_after), _calc_limit(limit))
        return AllPermissionsResponse(
            [PermissionsInfo(spender, self._permissions[spender]) for spender in keys]
        )

    def is_authorized(self, env: Env, sender: str, msg: Any) -> bool:
        """Whether the sender may have this contract dispatch the message."""
        if self._whitelist.is_admin(sender):
            return True

        if isinstance(msg, BankSend):
            allowance = self._allowances.get(sender)
            if allowance is None or allowance.expires.is_expired(env.block):
                return False
            try:
                allowance.balance - msg.amount
            except Overflow:
                return False
            return True

        if isinstance(msg, (Delegate, Undelegate, Redelegate)):
            perms = self._permissions.get(sender)
            if perms is None:
                return False
            if isinstance(msg, Delegate):
                return perms.delegate
            if isinstance(msg, Undelegate):
                return perms.undelegate
            return perms.redelegate

        if isinstance(msg, (SetWithdrawAddress, WithdrawDelegatorReward)):
            perms = self._permissions.get(sender)
            return perms is not None and perms.withdraw

        return False

    def execute(self, env: Env, sender: str, msgs: Iterable[Any]) -> Response:
        """Dispatch the messages if the sender is authorized for every one of them."""
        msgs = list(msgs)
        verdicts = [self.is_authorized(env, sender, msg) for msg in msgs]
        if not all(verdicts):
            raise Unauthorized()
        return (
            Response()
            .add_messages(msgs)
            .add_attribute("action", "execute")
            .add_attribute("owner", sender)
        )

    def can_execute(self, env: Env, sender: str, msg: Any) -> bool:
        """Whether the sender could execute the message."""
        return self.is_authorized(env, sender, msg)

    def freeze(self, sender: str) -> Response:
        """Make the admin set permanent."""
        return self._whitelist.freeze(sender)

    def update_admins(self, sender: str, admins: Iterable[str]) -> Response:
        """Replace the admin set."""
        return self._whitelist.update_admins(sender, admins)

    def admin_list(self) -> AdminListResponse:
        """Admins in ascending order and whether they may still change."""
        return self._whitelist.admin_list()