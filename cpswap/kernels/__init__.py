"""
Kernel layer.

- `cpswap/kernels/dex/` contains kernel specs (.yaml) holding the fixed constants.
- `cpswap/kernels/python/` contains the Python kernels (human-readable, integer-only)
  that implement the same semantics.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Mapping

import yaml


@dataclass(frozen=True)
class KernelSpec:
    name: str
    version: int
    amount_bits: int
    fee_numerator: int
    fee_denominator: int
    initial_lp: int

    def __post_init__(self) -> None:
        for name in ("version", "amount_bits", "fee_numerator", "fee_denominator", "initial_lp"):
            v = getattr(self, name)
            if not isinstance(v, int) or isinstance(v, bool) or v <= 0:
                raise ValueError(f"kernel spec {name} must be a positive int: {v!r}")
        if self.fee_numerator > self.fee_denominator:
            raise ValueError("fee numerator must not exceed the denominator")

    @property
    def amount_max(self) -> int:
        return (1 << self.amount_bits) - 1


def _spec_path(name: str) -> Path:
    # cpswap/kernels/__init__.py -> cpswap/kernels/dex/<name>.yaml
    return Path(__file__).resolve().parent / "dex" / f"{name}.yaml"


def _section(obj: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = obj.get(key)
    if not isinstance(value, Mapping):
        raise ValueError(f"kernel spec section {key!r} must be a mapping")
    return value


@lru_cache(maxsize=None)
def load_kernel_spec(name: str = "cpmm_pool_v1") -> KernelSpec:
    """
    Load a kernel spec YAML into a `KernelSpec`.

    Raises:
        FileNotFoundError: If no spec with that name ships with the package
        ValueError: If the YAML does not have the expected shape
    """
    path = _spec_path(name)
    obj = yaml.safe_load(path.read_text(encoding="utf-8"))
    if not isinstance(obj, Mapping):
        raise ValueError("kernel spec YAML must be a mapping")
    fee = _section(obj, "fee")
    return KernelSpec(
        name=str(obj.get("name", name)),
        version=obj.get("version"),
        amount_bits=_section(obj, "domain").get("amount_bits"),
        fee_numerator=fee.get("numerator"),
        fee_denominator=fee.get("denominator"),
        initial_lp=_section(obj, "liquidity").get("initial_lp"),
    )


__all__ = ["KernelSpec", "load_kernel_spec"]
