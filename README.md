# cwproxy

Proxy contracts that forward messages on behalf of their callers, with all
state kept in memory.

- `WhitelistContract` (in `cwproxy.whitelist`) holds a set of admins. Any admin
  may have the contract execute a batch of messages; the admin set can be
  replaced until it is frozen.
- `SubkeysContract` (in `cwproxy.subkeys`) builds on the whitelist. Admins can
  also grant other accounts a spending allowance for bank transfers (with an
  optional expiration) and staking or distribution permissions.

Supporting modules:

- `cwproxy.chain`: `Coin`, `NativeBalance`, `Expiration`, `BlockInfo`, `Env`,
  `Response`, the message types `BankSend`, `WasmExecute`, `Delegate`,
  `Undelegate`, `Redelegate`, `SetWithdrawAddress`, `WithdrawDelegatorReward`,
  and `validate_address`.
- `cwproxy.state`: `Permissions`, `Allowance`, `AllowanceInfo`,
  `PermissionsInfo`, `AllAllowancesResponse`, `AllPermissionsResponse`,
  `AdminListResponse`.
- `cwproxy.errors`: `ContractError` and its subclasses.

## Installation

```
pip install .
```

## Whitelist

```python
from cwproxy.whitelist import WhitelistContract
from cwproxy.chain import BankSend, Coin
from cwproxy.errors import Unauthorized

contract = WhitelistContract()
contract.instantiate("anyone", ["alice", "bob"], True)

send = BankSend(to_address="carl", amount=[Coin(10000, "DAI")])
response = contract.execute("alice", [send])      # admins may execute
assert response.messages == [send]
assert response.attributes == [("action", "execute")]

try:
    contract.execute("carl", [send])
except Unauthorized:
    pass

contract.update_admins("alice", ["alice"])         # drop bob
contract.freeze("alice")                           # no more changes
print(contract.admin_list())                       # AdminListResponse(admins=['alice'], mutable=False)
print(contract.contract_version())                 # ('cw1-whitelist', '0.1.0')
```

`can_execute(sender, msg)` returns `True` exactly when the sender is an admin.
`update_admins` raises `ContractFrozen` after `freeze`.

## Subkeys

```python
from cwproxy.subkeys import SubkeysContract
from cwproxy.chain import BankSend, BlockInfo, Coin, Delegate, Env, Expiration
from cwproxy.state import Permissions

env = Env(block=BlockInfo(height=12345, time=1_571_797_419_879_305_533))

contract = SubkeysContract()
contract.instantiate("owner", ["owner"], False)

contract.increase_allowance(
    env, "owner", "spender", Coin(100, "atom"), Expiration.at_height(env.block.height + 10)
)
contract.set_permissions("owner", "spender", Permissions(delegate=True))

contract.can_execute(env, "spender", BankSend(to_address="bob", amount=[Coin(50, "atom")]))   # True
contract.can_execute(env, "spender", Delegate(validator="val", amount=Coin(1, "atom")))      # True

print(contract.allowance(env, "spender"))
print(contract.all_allowances(env, None, 10))
print(contract.all_permissions(None, 10))
```

Rules the contract follows:

- Only admins may change allowances or permissions (`Unauthorized` otherwise),
  and never for themselves (`CannotSetOwnAccount`).
- An expired allowance is treated as absent. Setting an expiration that has
  already passed raises `SettingExpiredAllowance`.
- `decrease_allowance` raises `NoAllowance` when there is no live allowance;
  amounts larger than the balance bring that denomination to zero, and the
  allowance is removed once it is empty.
- Admins may execute anything. Other senders may execute a `BankSend` covered
  by their allowance, and staking or distribution messages their
  `Permissions` allow. `execute` requires every message to be authorized.
- `execute` does not spend the allowance; it only checks it.
- Listing queries are ordered by spender address: pass the last spender seen
  as `start_after`; `limit` defaults to 10 and is capped at 30.

Addresses passed to instantiation and to allowance or permission changes are
checked by `validate_address`: 3 to 90 characters, all lower case; otherwise
`InvalidAddress` is raised.

Use `BlockInfo.next()` to move to the following block (one higher, five
seconds later) when testing expirations.

## Errors

All errors derive from `cwproxy.errors.ContractError`: `Unauthorized`,
`ContractFrozen`, `CannotSetOwnAccount`, `NoAllowance`,
`SettingExpiredAllowance`, and `StdError` with its subclasses `InvalidAddress`,
`NotFound` and `Overflow`.

## What this package does not do

The contracts are plain Python objects. Nothing is persisted, there is no
chain or network behind them, messages returned in a `Response` are not
dispatched or carried out, and there is no JSON message encoding, schema
output or command-line program.

## Running the tests

```
pip install .[test]
pytest
```