#!/usr/bin/env python3

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from src.core.curve import AmmError, LiquidityPair
from src.integration import AmmConfig, AmmProgram


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Create a pool, seed liquidity and run one swap in memory.")
    p.add_argument("--config", type=Path, default=None, help="optional AMM config YAML")
    p.add_argument("--fee-bps", type=int, default=30)
    p.add_argument("--reserve-x", type=int, default=1_000_000)
    p.add_argument("--reserve-y", type=int, default=2_000_000)
    p.add_argument("--amount-in", type=int, default=10_000)
    p.add_argument("--direction", choices=("x", "y"), default="x", help="asset paid into the pool")
    p.add_argument("--slippage-bps", type=int, default=50, help="tolerated shortfall vs the quote")
    p.add_argument("-v", "--verbose", action="store_true")
    return p.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    config = AmmConfig.from_env(AmmConfig.from_yaml(args.config) if args.config else None)
    program = AmmProgram(config)
    lp = "lp-" + "11" * 16
    trader = "trader-" + "22" * 16
    mint_x, mint_y = "mint-x", "mint-y"
    deadline = int(time.time()) + 3600

    try:
        pool_id = program.initialize(seed=1, mint_x=mint_x, mint_y=mint_y, fee_bps=args.fee_bps, authority=lp)
        program.mint_to(lp, mint_x, args.reserve_x)
        program.mint_to(lp, mint_y, args.reserve_y)
        program.deposit(pool_id, lp, shares=1, max_x=args.reserve_x, max_y=args.reserve_y, expiration=deadline)

        pair = LiquidityPair.TOKEN_X if args.direction == "x" else LiquidityPair.TOKEN_Y
        mint_in = mint_x if pair is LiquidityPair.TOKEN_X else mint_y
        program.mint_to(trader, mint_in, args.amount_in)

        before = program.reserves(pool_id)
        print(f"[offline-demo] pool_id={pool_id}")
        print(f"[offline-demo] reserves before swap: x={before.token_x} y={before.token_y} fee_bps={args.fee_bps}")

        quote = program.quote_swap(pool_id, pair, args.amount_in)
        min_out = quote.withdrawn * (10_000 - args.slippage_bps) // 10_000
        outcome = program.swap(
            pool_id, trader, pair=pair, amount_in=args.amount_in, min_amount_out=min_out, expiration=deadline
        )
    except AmmError as exc:
        print(f"[offline-demo] FAIL: {exc.code}: {exc}")
        return 1

    after = program.reserves(pool_id)
    print(f"[offline-demo] reserves after swap:  x={after.token_x} y={after.token_y}")
    print(f"[offline-demo] deposited={outcome.deposited} withdrawn={outcome.withdrawn} fee={outcome.fee} (min_out={min_out})")
    print("[offline-demo] OK: swap executed")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
