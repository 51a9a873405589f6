from cwproxy.chain import Coin, Expiration, NativeBalance
from cwproxy.state import (
    AdminListResponse,
    AllAllowancesResponse,
    AllowanceInfo,
    AllPermissionsResponse,
    Allowance,
    Permissions,
    PermissionsInfo,
)


def test_permissions_default_all_false():
    perms = Permissions()
    assert (perms.delegate, perms.redelegate, perms.undelegate, perms.withdraw) == (
        False,
        False,
        False,
        False,
    )


def test_permissions_str():
    perms = Permissions(delegate=True, redelegate=True, undelegate=True, withdraw=True)
    assert (
        str(perms)
        == "staking: { delegate: true, redelegate: true, undelegate: true, withdraw: true }"
    )


def test_permissions_str_reflects_fields():
    text = str(Permissions(delegate=True))
    assert "delegate: true" in text
    assert "withdraw: false" in text


def test_allowance_default():
    allow = Allowance()
    assert allow.balance.is_empty()
    assert allow.expires == Expiration.never()


def test_allowance_canonical_documented_example():
    allow1 = Allowance(
        balance=NativeBalance(
            [Coin(1, "token1"), Coin(0, "token2"), Coin(2, "token1"), Coin(3, "token3")]
        ),
        expires=Expiration.never(),
    )
    allow2 = Allowance(
        balance=NativeBalance([Coin(3, "token3"), Coin(3, "token1")]),
        expires=Expiration.never(),
    )
    assert allow1 != allow2
    assert allow1.canonical() == allow2.canonical()


def test_allowance_info_canonical_keeps_spender_and_expiry():
    info = AllowanceInfo(
        "spender1", NativeBalance([Coin(0, "a"), Coin(4, "b")]), Expiration.at_height(9)
    )
    canon = info.canonical()
    assert canon.spender == "spender1"
    assert canon.expires == Expiration.at_height(9)
    assert canon.balance == NativeBalance([Coin(4, "b")])


def test_all_allowances_canonical_sorts_by_spender():
    response = AllAllowancesResponse(
        [
            AllowanceInfo("spender2", NativeBalance([Coin(1, "token1")]), Expiration.never()),
            AllowanceInfo("spender1", NativeBalance([Coin(2, "token2")]), Expiration.never()),
        ]
    )
    canon = response.canonical()
    assert [info.spender for info in canon.allowances] == ["spender1", "spender2"]
    assert [info.spender for info in response.allowances] == ["spender2", "spender1"]


def test_admin_list_canonical_documented_example():
    resp1 = AdminListResponse(["admin1", "admin2"], True)
    resp2 = AdminListResponse(["admin2", "admin1", "admin2"], True)
    assert resp1.canonical() == resp2.canonical()
    assert resp2.canonical().admins == ["admin1", "admin2"]


def test_admin_list_canonical_keeps_mutable_flag():
    assert AdminListResponse(["b", "a"], False).canonical() == AdminListResponse(["a", "b"], False)


def test_permissions_sorted_by_spender():
    perms = [
        PermissionsInfo("spender2", Permissions()),
        PermissionsInfo("spender1", Permissions()),
    ]
    response = AllPermissionsResponse(sorted(perms, key=lambda p: p.spender))
    assert [p.spender for p in response.permissions] == ["spender1", "spender2"]