"""Chain primitives: coins, balances, expirations, blocks, messages and responses."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Iterable, Union

from .errors import InvalidAddress, Overflow

UINT128_MAX = 2**128 - 1
NANOS_PER_SECOND = 1_000_000_000
MIN_ADDRESS_LENGTH = 3
MAX_ADDRESS_LENGTH = 90


@dataclass(frozen=True)
class Coin:
    """An amount of a single denomination."""

    amount: int
    denom: str

    def __post_init__(self) -> None:
        if isinstance(self.amount, bool) or not isinstance(self.amount, int):
            raise TypeError("coin amount must be an integer")
        if not 0 <= self.amount <= UINT128_MAX:
            raise ValueError(f"coin amount out of range: {self.amount}")

    def __str__(self) -> str:
        return f"{self.amount}{self.denom}"


def _coins_of(value: Any) -> list[Coin]:
    if isinstance(value, Coin):
        return [value]
    if isinstance(value, NativeBalance):
        return list(value.coins)
    coins = list(value)
    if not all(isinstance(coin, Coin) for coin in coins):
        raise TypeError("expected coins")
    return coins


def _find(coins: list[Coin], denom: str) -> int | None:
    return next((i for i, coin in enumerate(coins) if coin.denom == denom), None)


def _sub_failure(held: int, wanted: int) -> Overflow:
    return Overflow(f"Cannot Sub with {held} and {wanted}")


@dataclass(frozen=True)
class NativeBalance:
    """A set of coins of several denominations."""

    coins: tuple[Coin, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "coins", tuple(_coins_of(self.coins)))

    def __iter__(self):
        return iter(self.coins)

    def __len__(self) -> int:
        return len(self.coins)

    def __add__(self, coin: Any) -> NativeBalance:
        try:
            incoming = _coins_of(coin)
        except TypeError:
            return NotImplemented
        coins = list(self.coins)
        for item in incoming:
            idx = _find(coins, item.denom)
            if idx is not None:
                held = coins[idx].amount
                total = held + item.amount
                if total > UINT128_MAX:
                    raise Overflow(f"Cannot Add with {held} and {item.amount}")
                coins[idx] = Coin(total, item.denom)
            else:
                pos = next(
                    (i for i, existing in enumerate(coins) if existing.denom >= item.denom),
                    len(coins),
                )
                coins.insert(pos, item)
        return NativeBalance(coins)

    def __sub__(self, coin: Any) -> NativeBalance:
        """Subtract coins, raising Overflow if any denomination falls short."""
        try:
            outgoing = _coins_of(coin)
        except TypeError:
            return NotImplemented
        coins = list(self.coins)
        for item in outgoing:
            idx = _find(coins, item.denom)
            if idx is None:
                raise _sub_failure(0, item.amount)
            held = coins[idx].amount
            if held < item.amount:
                raise _sub_failure(held, item.amount)
            if held == item.amount:
                del coins[idx]
            else:
                coins[idx] = Coin(held - item.amount, item.denom)
        return NativeBalance(coins)

    def sub_saturating(self, coin: Coin) -> NativeBalance:
        """Subtract down to zero; the denomination must be present."""
        coins = list(self.coins)
        idx = _find(coins, coin.denom)
        if idx is None:
            raise _sub_failure(0, coin.amount)
        held = coins[idx].amount
        if held <= coin.amount:
            del coins[idx]
        else:
            coins[idx] = Coin(held - coin.amount, coin.denom)
        return NativeBalance(coins)

    def is_empty(self) -> bool:
        return all(coin.amount == 0 for coin in self.coins)

    def normalize(self) -> NativeBalance:
        """Merge duplicate denominations, drop zeros and sort by denomination."""
        totals: dict[str, int] = {}
        for coin in self.coins:
            if coin.amount:
                totals[coin.denom] = totals.get(coin.denom, 0) + coin.amount
        return NativeBalance(Coin(amount, denom) for denom, amount in sorted(totals.items()))

    def has(self, coin: Coin) -> bool:
        idx = _find(list(self.coins), coin.denom)
        return idx is not None and self.coins[idx].amount >= coin.amount


class ExpirationKind(Enum):
    AT_HEIGHT = "at_height"
    AT_TIME = "at_time"
    NEVER = "never"


def _format_time(nanos: int) -> str:
    seconds, fraction = divmod(nanos, NANOS_PER_SECOND)
    return f"{seconds}.{fraction:09d}"


@dataclass(frozen=True)
class Expiration:
    """When something stops being valid: a block height, a time in nanoseconds, or never."""

    kind: ExpirationKind = ExpirationKind.NEVER
    value: int = 0

    @classmethod
    def at_height(cls, height: int) -> Expiration:
        return cls(ExpirationKind.AT_HEIGHT, height)

    @classmethod
    def at_time(cls, nanos: int) -> Expiration:
        return cls(ExpirationKind.AT_TIME, nanos)

    @classmethod
    def never(cls) -> Expiration:
        return cls(ExpirationKind.NEVER, 0)

    def is_expired(self, block: BlockInfo) -> bool:
        if self.kind is ExpirationKind.AT_HEIGHT:
            return block.height >= self.value
        if self.kind is ExpirationKind.AT_TIME:
            return block.time >= self.value
        return False

    def __str__(self) -> str:
        if self.kind is ExpirationKind.AT_HEIGHT:
            return f"expiration height: {self.value}"
        if self.kind is ExpirationKind.AT_TIME:
            return f"expiration time: {_format_time(self.value)}"
        return "expiration: never"


@dataclass(frozen=True)
class BlockInfo:
    """The block a call runs in; time is in nanoseconds."""

    height: int = 12_345
    time: int = 1_571_797_419_879_305_533
    chain_id: str = "cosmos-testnet-14002"

    def next(self) -> BlockInfo:
        """The following block: one higher and five seconds later."""
        return replace(self, height=self.height + 1, time=self.time + 5 * NANOS_PER_SECOND)


@dataclass
class Env:
    block: BlockInfo = field(default_factory=BlockInfo)
    contract_address: str = "cosmos2contract"


@dataclass(frozen=True)
class BankSend:
    to_address: str
    amount: tuple[Coin, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "amount", tuple(self.amount))


@dataclass(frozen=True)
class WasmExecute:
    contract_addr: str
    msg: bytes
    funds: tuple[Coin, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "funds", tuple(self.funds))


@dataclass(frozen=True)
class Delegate:
    validator: str
    amount: Coin


@dataclass(frozen=True)
class Undelegate:
    validator: str
    amount: Coin


@dataclass(frozen=True)
class Redelegate:
    src_validator: str
    dst_validator: str
    amount: Coin


@dataclass(frozen=True)
class SetWithdrawAddress:
    address: str


@dataclass(frozen=True)
class WithdrawDelegatorReward:
    validator: str


CosmosMsg = Union[
    BankSend,
    WasmExecute,
    Delegate,
    Undelegate,
    Redelegate,
    SetWithdrawAddress,
    WithdrawDelegatorReward,
]


@dataclass
class Response:
    """Outcome of an executed call: messages to dispatch and event attributes."""

    messages: list[Any] = field(default_factory=list)
    attributes: list[tuple[str, str]] = field(default_factory=list)

    def add_attribute(self, key: str, value: Any) -> Response:
        self.attributes.append((key, str(value)))
        return self

    def add_message(self, msg: Any) -> Response:
        self.messages.append(msg)
        return self

    def add_messages(self, msgs: Iterable[Any]) -> Response:
        self.messages.extend(msgs)
        return self


def validate_address(address: str) -> str:
    """Check that an address is well formed and normalized, returning it."""
    if not isinstance(address, str):
        raise InvalidAddress("Invalid input: address must be a string")
    if len(address) < MIN_ADDRESS_LENGTH:
        raise InvalidAddress("Invalid input: human address too short")
    if len(address) > MAX_ADDRESS_LENGTH:
        raise InvalidAddress("Invalid input: human address too long")
    if address != address.lower():
        raise InvalidAddress("Invalid input: address not normalized")
    return address