import pytest

from cwproxy.chain import BankSend, Coin, Delegate, WasmExecute
from cwproxy.errors import ContractFrozen, InvalidAddress, NotFound, Unauthorized
from cwproxy.state import AdminListResponse
from cwproxy.whitelist import CONTRACT_NAME, CONTRACT_VERSION, WhitelistContract

FREEZE_MSG = b'{"freeze":{}}'


def _instantiated(admins, mutable, sender="anyone"):
    contract = WhitelistContract()
    contract.instantiate(sender, admins, mutable)
    return contract


def test_instantiate_and_modify_config():
    contract = _instantiated(["alice", "bob", "carl"], True)
    assert contract.admin_list() == AdminListResponse(["alice", "bob", "carl"], True)

    with pytest.raises(Unauthorized):
        contract.update_admins("anyone", ["anyone"])

    contract.update_admins("alice", ["alice", "bob"])
    assert contract.admin_list() == AdminListResponse(["alice", "bob"], True)

    with pytest.raises(Unauthorized):
        contract.freeze("carl")

    contract.freeze("bob")
    assert contract.admin_list() == AdminListResponse(["alice", "bob"], False)

    with pytest.raises(ContractFrozen):
        contract.update_admins("alice", ["alice"])


def test_execute_messages_has_proper_permissions():
    contract = _instantiated(["alice", "carl"], False, sender="bob")
    msgs = [
        BankSend("bob", (Coin(10000, "DAI"),)),
        WasmExecute("some contract", FREEZE_MSG),
    ]

    with pytest.raises(Unauthorized):
        contract.execute("bob", msgs)

    res = contract.execute("carl", msgs)
    assert res.messages == msgs
    assert res.attributes == [("action", "execute")]


def test_can_execute_query_works():
    contract = _instantiated(["alice", "bob"], False)
    send_msg = BankSend("anyone", (Coin(12345, "ushell"),))
    staking_msg = Delegate("anyone", Coin(70000, "ureef"))

    assert contract.can_execute("alice", send_msg) is True
    assert contract.can_execute("bob", staking_msg) is True
    assert contract.can_execute("anyone", send_msg) is False
    assert contract.can_execute("anyone", staking_msg) is False


def test_proxy_freeze_message():
    first = _instantiated(["owner"], True, sender="owner")
    second_addr = "contract1"
    second = _instantiated(["contract0"], True, sender="owner")
    freeze = WasmExecute(second_addr, FREEZE_MSG)

    res = first.execute("owner", [freeze])
    contracts = {second_addr: second}
    for msg in res.messages:
        assert msg.msg == FREEZE_MSG
        contracts[msg.contract_addr].freeze("contract0")

    assert second.admin_list().mutable is False


def test_update_admins():
    admins = ["admin1", "admin2"]
    contract = _instantiated(admins, True, sender="owner")
    assert contract.admin_list().admins == admins

    admins = admins + ["admin3"]
    res = contract.update_admins("admin1", admins)
    assert res.attributes == [("action", "update_admins")]
    assert contract.admin_list().admins == admins


def test_unauthorized_admin_update():
    contract = _instantiated(["owner"], True, sender="owner")
    with pytest.raises(Unauthorized):
        contract.update_admins("fake_admin", ["owner", "fake_admin"])

    res = contract.freeze("owner")
    assert res.attributes == [("action", "freeze")]

    with pytest.raises(ContractFrozen):
        contract.update_admins("owner", ["owner", "admin"])


def test_admin_list_is_sorted_and_unique():
    contract = _instantiated(["carl", "alice", "bob", "alice"], True)
    assert contract.admin_list().admins == ["alice", "bob", "carl"]


def test_update_admins_removes_dropped_admins():
    contract = _instantiated(["alice", "bob", "carl"], True)
    contract.update_admins("bob", ["dave", "bob"])
    assert contract.admin_list().admins == ["bob", "dave"]
    assert contract.is_admin("alice") is False
    assert contract.is_admin("dave") is True


def test_update_admins_invalid_address_leaves_state():
    contract = _instantiated(["alice", "bob"], True)
    with pytest.raises(InvalidAddress):
        contract.update_admins("alice", ["alice", "Bad"])
    assert contract.admin_list().admins == ["alice", "bob"]


def test_instantiate_rejects_invalid_address():
    contract = WhitelistContract()
    with pytest.raises(InvalidAddress):
        contract.instantiate("anyone", ["ok_admin", "x"], True)
    assert contract.is_admin("ok_admin") is False


def test_queries_before_instantiate_fail():
    contract = WhitelistContract()
    with pytest.raises(NotFound):
        contract.admin_list()
    with pytest.raises(NotFound):
        contract.contract_version()


def test_contract_version():
    contract = _instantiated(["owner"], True)
    assert contract.contract_version() == (CONTRACT_NAME, CONTRACT_VERSION)