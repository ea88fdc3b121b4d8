"""Tests de las funciones aritméticas."""

import pytest
from mpmath import mp

from math_library import add, comb, divide, factorial, mul, power, root, sub


class TestBasicOperations:
    def test_add(self):
        assert add(13, 0) == 13
        assert add(-77, 69) == -8
        assert abs(add(42.25847, 9854.44587) - 9896.70434) < 1e-8

    def test_sub(self):
        assert sub(45, 28) == 17
        assert sub(-77, -69) == -8
        assert abs(sub(28.4569, -333.88888) - 362.34578) < 1e-8

    def test_mul(self):
        assert mul(45, 28) == 1260
        assert mul(-77, 69) == -5313
        assert mul(13, 0) == 0

    def test_divide(self):
        assert divide(0, 96) == 0
        assert abs(divide(45, 28) - mp.mpf("1.60714285714")) < 1e-8
        assert abs(divide(-77, 69) - mp.mpf("-1.11594202899")) < 1e-8

    def test_divide_by_zero_raises(self):
        with pytest.raises(ZeroDivisionError):
            divide(1, 0)


class TestPower:
    def test_integer_exponent(self):
        assert power(45, 2) == 2025
        assert power(-77, 5) == -2706784157
        assert power(-77, 4) == 35153041
        assert power(1, 200) == 1
        assert power(48, 0) == 1

    def test_fractional_base(self):
        assert abs(power(mp.mpf("0.12575"), 4) - mp.mpf("0.00025005294")) < 1e-8

    def test_negative_exponent_rejected(self):
        with pytest.raises(ValueError):
            power(2, -1)


class TestRoot:
    @pytest.mark.parametrize(
        "x, y, expected",
        [
            (45, 2, "6.7082039325"),
            (-3, 3, "-1.44224957031"),
            (-77, 5, "-2.38395550345"),
            ("0.12575", 4, "0.59549346304"),
            ("-28.4569", 7, "-1.61339640149"),
        ],
    )
    def test_close_to_reference(self, x, y, expected):
        assert abs(root(mp.mpf(x), y) - mp.mpf(expected)) < 1e-8

    def test_exact_values(self):
        assert root(1, 10) == 1
        assert root(0, 5) == 0
        assert abs(root(27, 3) - 3) < 1e-12

    def test_large_radicand_converges(self):
        assert abs(root(mp.mpf("1e90"), 2) / mp.mpf("1e45") - 1) < 1e-12

    def test_invalid_index(self):
        with pytest.raises(ValueError):
            root(8, 0)

    def test_even_root_of_negative(self):
        with pytest.raises(ValueError):
            root(-4, 2)


class TestFactorial:
    @pytest.mark.parametrize(
        "n, expected",
        [(0, 1), (1, 1), (5, 120), (7, 5040), (15, 1307674368000), (20, 2432902008176640000)],
    )
    def test_values(self, n, expected):
        assert factorial(n) == expected

    def test_negative_rejected(self):
        with pytest.raises(ValueError):
            factorial(-1)


class TestComb:
    @pytest.mark.parametrize(
        "n, k, expected",
        [(45, 2, 990), (77, 5, 19757815), (6, 6, 1), (25, 1, 25), (15, 0, 1), (0, 0, 1)],
    )
    def test_values(self, n, k, expected):
        assert comb(n, k) == expected

    def test_k_greater_than_n(self):
        assert comb(3, 5) == 0

    def test_negative_rejected(self):
        with pytest.raises(ValueError):
            comb(-1, 2)

    def test_limit_stops_early(self):
        assert comb(10**50, 10**20, limit=mp.mpf("1e99")) > mp.mpf("1e99")
