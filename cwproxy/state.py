"""Stored records and query responses of the proxy contracts."""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from .chain import Expiration, NativeBalance


def _flag(value: bool) -> str:
    return "true" if value else "false"


@dataclass(frozen=True)
class Permissions:
    """Which staking and distribution messages a spender may run."""

    delegate: bool = False
    redelegate: bool = False
    undelegate: bool = False
    withdraw: bool = False

    def __str__(self) -> str:
        return (
            f"staking: {{ delegate: {_flag(self.delegate)}, "
            f"redelegate: {_flag(self.redelegate)}, "
            f"undelegate: {_flag(self.undelegate)}, "
            f"withdraw: {_flag(self.withdraw)} }}"
        )


@dataclass(frozen=True)
class Allowance:
    """Coins a spender may send, and when that right ends."""

    balance: NativeBalance = field(default_factory=NativeBalance)
    expires: Expiration = field(default_factory=Expiration.never)

    def canonical(self) -> Allowance:
        return replace(self, balance=self.balance.normalize())


@dataclass(frozen=True)
class AllowanceInfo:
    spender: str
    balance: NativeBalance
    expires: Expiration

    def canonical(self) -> AllowanceInfo:
        return replace(self, balance=self.balance.normalize())


@dataclass(frozen=True)
class PermissionsInfo:
    spender: str
    permissions: Permissions


@dataclass
class AllAllowancesResponse:
    allowances: list[AllowanceInfo] = field(default_factory=list)

    def canonical(self) -> AllAllowancesResponse:
        """Normalized balances, sorted by spender."""
        items = sorted(
            (info.canonical() for info in self.allowances), key=lambda info: info.spender
        )
        return AllAllowancesResponse(items)


@dataclass
class AllPermissionsResponse:
    permissions: list[PermissionsInfo] = field(default_factory=list)


@dataclass
class AdminListResponse:
    admins: list[str] = field(default_factory=list)
    mutable: bool = False

    def canonical(self) -> AdminListResponse:
        """Admins sorted with duplicates removed."""
        return AdminListResponse(sorted(set(self.admins)), self.mutable)