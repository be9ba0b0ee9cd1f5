from __future__ import annotations

import dataclasses

import pytest

from ledgerdump.models.transaction import Account, Burn, Mint, Transfer


class TestAccount:
    def test_missing_subaccount_equals_default_subaccount(self) -> None:
        assert Account("2vxsx-fae") == Account("2vxsx-fae", bytes(32))
        assert hash(Account("2vxsx-fae")) == hash(Account("2vxsx-fae", bytes(32)))

    def test_different_subaccounts_differ(self) -> None:
        assert Account("2vxsx-fae", bytes(32)) != Account(
            "2vxsx-fae", bytes(31) + b"\x01"
        )

    def test_different_owners_differ(self) -> None:
        assert Account("2vxsx-fae") != Account("aaaaa-aa")

    def test_subaccount_must_be_32_bytes(self) -> None:
        with pytest.raises(ValueError, match="32 bytes"):
            Account("2vxsx-fae", b"\x01")

    def test_account_is_immutable(self) -> None:
        account = Account("2vxsx-fae")

        with pytest.raises(dataclasses.FrozenInstanceError):
            account.owner = "aaaaa-aa"  # type: ignore[misc]


class TestTransactions:
    def test_kinds(self) -> None:
        assert Burn.kind == "burn"
        assert Mint.kind == "mint"
        assert Transfer.kind == "transfer"

    def test_negative_amount_is_rejected(self) -> None:
        with pytest.raises(ValueError, match="amount"):
            Mint(timestamp=0, to=Account("2vxsx-fae"), amount=-1)

    def test_long_memo_is_kept_whole(self) -> None:
        memo = bytes(range(80))

        tx = Burn(timestamp=0, from_=Account("2vxsx-fae"), amount=1, memo=memo)

        assert tx.memo == memo

    def test_negative_fee_is_rejected(self) -> None:
        with pytest.raises(ValueError, match="fee"):
            Transfer(
                timestamp=0,
                from_=Account("2vxsx-fae"),
                to=Account("aaaaa-aa"),
                amount=1,
                fee=-1,
            )

    def test_amount_is_unbounded(self) -> None:
        amount = 2**128

        tx = Mint(timestamp=0, to=Account("2vxsx-fae"), amount=amount)

        assert tx.amount == amount
