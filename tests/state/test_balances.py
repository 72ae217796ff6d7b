# [TESTER] v1

from __future__ import annotations

import copy
import pickle

import pytest

from cpswap.errors import (
    ArithmeticOverflowError,
    AssetError,
    AssetMismatchError,
    ConsumedHandleError,
)
from cpswap.state import TokenSupply, TxContext, U64_MAX, destroy_zero, merge, split, zero
from cpswap.state.balances import require_u64

ASSET_A = "0x" + "11" * 32
ASSET_B = "0x" + "22" * 32


def _supply(asset: str = ASSET_A) -> tuple[TokenSupply, TxContext]:
    ctx = TxContext(sender="0x" + "aa" * 48)
    return TokenSupply(asset=asset, authority_id=ctx.fresh_id()), ctx


class TestRequireU64:
    def test_accepts_bounds(self) -> None:
        assert require_u64("x", 0) == 0
        assert require_u64("x", U64_MAX) == U64_MAX

    def test_rejects_overflow(self) -> None:
        with pytest.raises(ArithmeticOverflowError, match="x overflows u64"):
            require_u64("x", U64_MAX + 1)

    def test_rejects_negative_and_bool(self) -> None:
        with pytest.raises(ValueError, match="non-negative"):
            require_u64("x", -1)
        with pytest.raises(TypeError):
            require_u64("x", True)


class TestTokenSupply:
    def test_mint_and_burn_track_total_supply(self) -> None:
        supply, ctx = _supply()
        h1 = supply.mint(70, ctx)
        h2 = supply.mint(30, ctx)
        assert supply.total_supply == 100
        assert h1.object_id != h2.object_id

        assert supply.burn(h1) == 70
        assert supply.total_supply == 30
        assert h1.consumed

    def test_burn_rejects_foreign_asset(self) -> None:
        supply_a, ctx = _supply(ASSET_A)
        supply_b = TokenSupply(asset=ASSET_B, authority_id=ctx.fresh_id())
        h = supply_b.mint(5, ctx)
        with pytest.raises(AssetMismatchError):
            supply_a.burn(h)
        assert h.value() == 5

    def test_mint_rejects_supply_overflow(self) -> None:
        supply, ctx = _supply()
        supply.mint(U64_MAX, ctx)
        with pytest.raises(ArithmeticOverflowError):
            supply.mint(1, ctx)
        assert supply.total_supply == U64_MAX


class TestSplitMerge:
    def test_split_conserves_value_and_consumes_input(self) -> None:
        supply, ctx = _supply()
        h = supply.mint(100, ctx)
        taken, rest = split(h, 40, ctx)
        assert (taken.value(), rest.value()) == (40, 60)
        with pytest.raises(ConsumedHandleError):
            h.value()

    def test_split_more_than_held_leaves_handle_intact(self) -> None:
        supply, ctx = _supply()
        h = supply.mint(10, ctx)
        with pytest.raises(AssetError, match="cannot split"):
            split(h, 11, ctx)
        assert h.value() == 10

    def test_merge_moves_everything(self) -> None:
        supply, ctx = _supply()
        a = supply.mint(3, ctx)
        b = supply.mint(4, ctx)
        merge(a, b)
        assert a.value() == 7
        assert b.consumed
        with pytest.raises(ConsumedHandleError):
            merge(a, b)

    def test_merge_rejects_mismatched_assets(self) -> None:
        supply_a, ctx = _supply(ASSET_A)
        supply_b = TokenSupply(asset=ASSET_B, authority_id=ctx.fresh_id())
        a = supply_a.mint(1, ctx)
        b = supply_b.mint(1, ctx)
        with pytest.raises(AssetMismatchError):
            merge(a, b)
        assert not b.consumed

    def test_merge_rejects_overflow_without_consuming(self) -> None:
        supply_1, ctx = _supply(ASSET_A)
        supply_2 = TokenSupply(asset=ASSET_A, authority_id=ctx.fresh_id())
        a = supply_1.mint(U64_MAX, ctx)
        b = supply_2.mint(1, ctx)
        with pytest.raises(ArithmeticOverflowError):
            merge(a, b)
        assert a.value() == U64_MAX
        assert b.value() == 1

    def test_merge_into_itself_is_rejected(self) -> None:
        supply, ctx = _supply()
        a = supply.mint(1, ctx)
        with pytest.raises(AssetError):
            merge(a, a)

    def test_destroy_zero(self) -> None:
        _, ctx = _supply()
        z = zero(ASSET_A, ctx)
        destroy_zero(z)
        assert z.consumed

        supply, _ = _supply()
        h = supply.mint(1, ctx)
        with pytest.raises(AssetError, match="cannot destroy"):
            destroy_zero(h)


def test_handles_cannot_be_copied_or_pickled() -> None:
    supply, ctx = _supply()
    h = supply.mint(1, ctx)
    with pytest.raises(TypeError):
        copy.copy(h)
    with pytest.raises(TypeError):
        copy.deepcopy(h)
    with pytest.raises(TypeError):
        pickle.dumps(h)


def test_fresh_ids_are_deterministic_per_context() -> None:
    ctx1 = TxContext(sender="0x01", digest="0x" + "ab" * 32)
    ctx2 = TxContext(sender="0x01", digest="0x" + "ab" * 32)
    assert [ctx1.fresh_id() for _ in range(3)] == [ctx2.fresh_id() for _ in range(3)]
    assert ctx1.ids_created == 3
    assert TxContext(sender="0x02", digest="0x" + "ab" * 32).fresh_id() != ctx1.fresh_id()
