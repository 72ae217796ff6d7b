"""
cpswap: a constant-product AMM core with integer-only, fail-closed arithmetic.

Layout:
- `cpswap.state`: pool state, asset handles, LP minting authority, execution context.
- `cpswap.kernels`: small pure integer kernels (swap math, LP math) and their YAML spec.
- `cpswap.core`: quote, swap and liquidity operations plus event records.
"""

__version__ = "0.1.0"
