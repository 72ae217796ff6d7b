#!/usr/bin/env python3

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from cpswap.core import RecordingEventSink, get_price, init_pool, quote_swap_a_for_b, swap_a_for_b
from cpswap.errors import CpSwapError
from cpswap.kernels import load_kernel_spec
from cpswap.state import TokenSupply, TxContext, create_lp_authority
from cpswap.state.canonical import snapshot_digest


def _parse_args(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Bootstrap an in-memory pool and run one A->B swap.")
    parser.add_argument("--amount-a", type=int, default=1000, help="initial reserve of asset A")
    parser.add_argument("--amount-b", type=int, default=2000, help="initial reserve of asset B")
    parser.add_argument("--swap-in", type=int, default=100, help="amount of A sold for B")
    parser.add_argument("--log-level", default="WARNING", help="logging level (DEBUG, INFO, ...)")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    sender = "0x" + "00" * 48
    asset_a = "0x" + "11" * 32
    asset_b = "0x" + "22" * 32
    ctx = TxContext(sender=sender)
    sink = RecordingEventSink()
    kernel = load_kernel_spec()
    print(
        f"[offline-demo] kernel: {kernel.name} v{kernel.version} "
        f"fee={kernel.fee_numerator}/{kernel.fee_denominator} initial_lp={kernel.initial_lp}"
    )

    supply_a = TokenSupply(asset=asset_a, authority_id=ctx.fresh_id())
    supply_b = TokenSupply(asset=asset_b, authority_id=ctx.fresh_id())
    authority = create_lp_authority(asset_a, asset_b, ctx)

    try:
        pool, lp = init_pool(
            supply_a.mint(args.amount_a, ctx),
            supply_b.mint(args.amount_b, ctx),
            authority,
            ctx,
            sink=sink,
        )
    except CpSwapError as exc:
        print(f"[offline-demo] FAIL (init pool): {exc}")
        return 1

    print(f"[offline-demo] pool_id={pool.pool_id}")
    print(f"[offline-demo] pool reserves after init: reserve_a={pool.reserve_a} reserve_b={pool.reserve_b} lp_supply={pool.lp_supply}")
    print(f"[offline-demo] lp minted to sender: {lp.value()}")
    print(f"[offline-demo] spot price (B per A): {get_price(pool)}")

    try:
        quoted = quote_swap_a_for_b(pool, args.swap_in)
        out = swap_a_for_b(pool, supply_a.mint(args.swap_in, ctx), ctx, sink=sink)
    except CpSwapError as exc:
        print(f"[offline-demo] FAIL (swap): {exc}")
        return 1

    print(f"[offline-demo] swap: in={args.swap_in} quoted={quoted} out={out.value()}")
    print(f"[offline-demo] pool reserves after swap: reserve_a={pool.reserve_a} reserve_b={pool.reserve_b}")
    print(f"[offline-demo] snapshot digest: {snapshot_digest(pool.snapshot())}")
    for event in sink.events:
        print(f"[offline-demo] event: {event.to_dict()}")
    print("[offline-demo] OK: swap executed")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
