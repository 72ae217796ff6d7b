# [TESTER] v1

from __future__ import annotations

import pytest

from cpswap.kernels import KernelSpec, load_kernel_spec
from cpswap.kernels.python import cpmm_swap_v1, lp_math_v1
from cpswap.state.balances import U64_MAX


def test_python_kernels_match_yaml_spec() -> None:
    spec = load_kernel_spec()
    assert spec.name == "cpmm_pool_v1"
    assert spec.fee_numerator == cpmm_swap_v1.FEE_NUMERATOR == 997
    assert spec.fee_denominator == cpmm_swap_v1.FEE_DENOMINATOR == 1000
    assert spec.initial_lp == lp_math_v1.INITIAL_LP
    assert spec.amount_max == U64_MAX == cpmm_swap_v1.U64_MAX == lp_math_v1.U64_MAX


def test_unknown_spec_name_is_missing() -> None:
    with pytest.raises(FileNotFoundError):
        load_kernel_spec("no_such_kernel")


def test_kernel_spec_validates_values() -> None:
    with pytest.raises(ValueError, match="initial_lp"):
        KernelSpec(name="x", version=1, amount_bits=64, fee_numerator=997, fee_denominator=1000, initial_lp=0)
    with pytest.raises(ValueError, match="numerator"):
        KernelSpec(name="x", version=1, amount_bits=64, fee_numerator=1001, fee_denominator=1000, initial_lp=1)
