import math

import numpy as np
import pytest

from scalar_grad import Operation, Tape, Var, leaf


@pytest.mark.parametrize("v", [0.0, 2.5, -7.0, 1e300, -1e-300, 3])
def test_leaf_value_and_zero_gradient(v):
    x = leaf(v)
    assert x.value() == v
    assert x.gradient() == 0.0
    assert x.is_leaf
    assert x.operation is None
    assert x.parents() == ()


def test_leaf_accepts_numpy_scalars():
    assert leaf(np.float32(1.5)).value() == 1.5
    assert leaf(np.int64(4)).value() == 4.0


@pytest.mark.parametrize("bad", ["1.0", None, [1.0], True, 1 + 2j])
def test_leaf_rejects_non_real(bad):
    with pytest.raises(TypeError):
        leaf(bad)


def test_add_and_mul_forward():
    x = leaf(2.0)
    y = leaf(3.0)
    assert (x + y).value() == 5.0
    assert (x * y).value() == 6.0


def test_apply_records_parents_in_order():
    x = leaf(2.0)
    y = leaf(3.0)
    z = Var.apply(Operation.MUL, [y, x])
    assert z.parents() == (y, x)
    assert z.operation is Operation.MUL
    assert not z.is_leaf


def test_apply_rejects_arity_mismatch():
    x = leaf(1.0)
    with pytest.raises(ValueError):
        Var.apply(Operation.ADD, [x])
    with pytest.raises(ValueError):
        Var.apply(Operation.MUL, [x, x, x])


def test_apply_rejects_non_var_operands():
    x = leaf(1.0)
    with pytest.raises(TypeError):
        Var.apply(Operation.ADD, [x, 2.0])


def test_no_implicit_scalar_conversion():
    x = leaf(1.0)
    with pytest.raises(TypeError):
        x + 2.0
    with pytest.raises(TypeError):
        2.0 * x
    with pytest.raises(TypeError):
        x - 1


def test_operands_must_share_a_tape():
    x = leaf(1.0, tape=Tape())
    y = leaf(1.0, tape=Tape())
    with pytest.raises(ValueError):
        x + y


def test_identity_not_value_equality():
    a = leaf(3.0)
    b = leaf(3.0)
    assert a != b
    assert len({a, b}) == 2
    assert a == a
    assert a != 3.0


def test_handles_to_same_node_are_equal():
    x = leaf(2.0)
    z = x * x
    p0, p1 = z.parents()
    assert p0 == p1 == x
    assert hash(p0) == hash(x)


def test_set_value_and_gradient_accumulation():
    x = leaf(1.0)
    x.set_value(4.0)
    x.add_gradient(1.5)
    x.add_gradient(2.0)
    assert x.value() == 4.0
    assert x.gradient() == 3.5
    x.set_gradient(0.25)
    assert x.gradient() == 0.25


def test_derived_value_is_not_recomputed():
    x = leaf(2.0)
    y = leaf(3.0)
    z = x * y
    x.set_value(10.0)
    assert z.value() == 6.0


def test_nan_propagates_silently():
    x = leaf(float("nan"))
    y = leaf(1.0)
    assert math.isnan((x + y).value())


def test_repr_shows_operation():
    x = leaf(2.0)
    assert "leaf" in repr(x)
    assert "mul" in repr(x * x)
