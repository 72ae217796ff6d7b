# [TESTER] v1

from __future__ import annotations

import pytest

from cpswap.core import NullEventSink, init_pool, swap_a_for_b
from cpswap.state import (
    PoolSnapshot,
    TokenSupply,
    TxContext,
    compute_pool_id,
    create_lp_authority,
    lp_asset_id,
)
from cpswap.state.canonical import canonical_json_bytes, snapshot_digest

ASSET_A = "0x" + "11" * 32
ASSET_B = "0x" + "22" * 32


def _pool(amount_a: int = 1000, amount_b: int = 2000):
    ctx = TxContext(sender="0x" + "aa" * 48)
    supply_a = TokenSupply(asset=ASSET_A, authority_id=ctx.fresh_id())
    supply_b = TokenSupply(asset=ASSET_B, authority_id=ctx.fresh_id())
    authority = create_lp_authority(ASSET_A, ASSET_B, ctx)
    pool, _ = init_pool(
        supply_a.mint(amount_a, ctx), supply_b.mint(amount_b, ctx), authority, ctx, sink=NullEventSink()
    )
    return pool, supply_a, ctx


def test_pool_id_is_deterministic_and_pair_sensitive() -> None:
    pid = compute_pool_id(ASSET_A, ASSET_B, "0x01")
    assert pid == compute_pool_id(ASSET_A, ASSET_B, "0x01")
    assert pid != compute_pool_id(ASSET_B, ASSET_A, "0x01")
    assert pid != compute_pool_id(ASSET_A, ASSET_B, "0x02")
    assert pid.startswith("0x") and len(pid) == 66
    with pytest.raises(ValueError, match="must differ"):
        compute_pool_id(ASSET_A, ASSET_A, "0x01")


def test_lp_asset_id_differs_from_pair() -> None:
    lp = lp_asset_id(ASSET_A, ASSET_B)
    assert lp not in (ASSET_A, ASSET_B)
    with pytest.raises(ValueError):
        lp_asset_id(ASSET_A, ASSET_A)


def test_snapshot_is_consistent_and_round_trips_through_dict() -> None:
    pool, _, _ = _pool()
    snap = pool.snapshot()
    assert (snap.reserve_a, snap.reserve_b, snap.lp_supply) == (1000, 2000, 1_000_000)
    assert snap.is_initialized
    assert snap.constant_product() == 2_000_000
    assert PoolSnapshot.from_dict(snap.to_dict()) == snap


def test_snapshot_from_dict_reports_missing_fields() -> None:
    with pytest.raises(ValueError, match="lp_supply"):
        PoolSnapshot.from_dict(
            {"pool_id": "0x", "asset_a": ASSET_A, "asset_b": ASSET_B, "lp_asset": "0x", "reserve_a": 1, "reserve_b": 1}
        )


def test_verify_invariant_and_violations() -> None:
    pool, _, _ = _pool()
    assert pool.verify_invariant(min_k=2_000_000)
    assert not pool.verify_invariant(min_k=2_000_001)
    assert pool.invariant_violations() == []


def test_snapshot_digest_tracks_state_changes() -> None:
    pool, supply_a, ctx = _pool()
    before = snapshot_digest(pool.snapshot())
    assert before == snapshot_digest(pool.snapshot())

    swap_a_for_b(pool, supply_a.mint(100, ctx), ctx, sink=NullEventSink())
    assert snapshot_digest(pool.snapshot()) != before


def test_canonical_json_is_sorted_compact_and_flat() -> None:
    assert canonical_json_bytes({"b": 1, "a": "x"}) == b'{"a":"x","b":1}'
    with pytest.raises(TypeError, match="'a'"):
        canonical_json_bytes({"a": 1.5})
    with pytest.raises(TypeError):
        canonical_json_bytes({"a": True})
    with pytest.raises(TypeError):
        canonical_json_bytes({"a": [1, 2]})
