import dataclasses

import pytest

from percentile_mandelbrot.arithmetic import Complex, add, lerp, magnitude, multiply


def test_add_is_componentwise():
    assert add(Complex(1.0, 2.0), Complex(3.0, -4.0)) == Complex(4.0, -2.0)


def test_multiply_follows_complex_product():
    assert multiply(Complex(1.0, 2.0), Complex(3.0, 4.0)) == Complex(-5.0, 10.0)
    # i * i == -1
    assert multiply(Complex(0.0, 1.0), Complex(0.0, 1.0)) == Complex(-1.0, 0.0)


def test_magnitude():
    assert magnitude(Complex(3.0, 4.0)) == 5.0
    assert magnitude(Complex(-3.0, -4.0)) == 5.0
    assert magnitude(Complex(0.0, 0.0)) == 0.0


def test_operators_delegate_to_free_functions():
    z = Complex(0.5, -0.25)
    c = Complex(-1.0, 0.1)
    assert z * z + c == add(multiply(z, z), c)
    assert abs(z) == magnitude(z)


def test_values_are_immutable():
    z = Complex(1.0, 1.0)
    with pytest.raises(dataclasses.FrozenInstanceError):
        z.real = 2.0

    w = z * z
    assert z == Complex(1.0, 1.0)
    assert w is not z


def test_lerp_endpoints_and_midpoint():
    assert lerp(-2.5, 1.5, 0.0) == -2.5
    assert lerp(-2.5, 1.5, 1.0) == 1.5
    assert lerp(0.0, 10.0, 0.25) == 2.5
