"""
Tests for su3lattice.color

Checks:
1. SU(2) samples lie on the unit 3-sphere at the configured spread
2. Embedding places the 2x2 block on the right rows / columns
3. R*S*T samples are special unitary (det ~ 1, U^dagger U ~ I)
4. Seeding gives reproducible streams
"""

import math

import pytest

from su3lattice.color import EPSILON, SPREAD, SU2_BLOCKS, Color, embed_su2
from su3lattice.complex import Complex
from su3lattice.matrix import Matrix


class TestConstants:
    """Fixed numerical constants"""

    def test_values(self) -> None:
        assert SPREAD == 0.5
        assert EPSILON == 1e-23
        assert SU2_BLOCKS == ((0, 1), (0, 2), (1, 2))


class TestSU2:
    """gen_su2"""

    @pytest.mark.parametrize("seed", [0, 1, 2, 3, 4])
    def test_unit_sphere(self, seed: int) -> None:
        a, b, c, d = Color(seed=seed).gen_su2()
        # r0^2 + r1^2 + r2^2 + r3^2 = 1
        assert a.norm_sqr() + b.norm_sqr() == pytest.approx(1.0, abs=1e-12)
        # determinant of [[a, b], [c, d]]
        det = a * d - b * c
        assert det.is_close(Complex(1.0, 0.0), tol=1e-12)

    def test_structure(self) -> None:
        a, b, c, d = Color(seed=42).gen_su2()
        # [[r0 + r3 i, r2 + r1 i], [-r2 + r1 i, r0 - r3 i]]
        assert d == a.conj()
        assert c == Complex(-b.re, b.im)
        assert abs(a.re) == pytest.approx(math.sqrt(1.0 - SPREAD ** 2))
        vec = math.sqrt(a.im ** 2 + b.re ** 2 + b.im ** 2)
        assert vec == pytest.approx(SPREAD)

    def test_zero_spread_is_diagonal_sign(self) -> None:
        a, b, c, d = Color(seed=3, spread=0.0).gen_su2()
        assert abs(a.re) == 1.0
        assert b == Complex(0.0, 0.0)
        assert c.norm() == 0.0

    def test_invalid_spread(self) -> None:
        with pytest.raises(ValueError):
            Color(spread=1.5)


class TestEmbedding:
    """embed_su2"""

    SU2 = (Complex(1.0, 1.0), Complex(2.0, 2.0), Complex(3.0, 3.0), Complex(4.0, 4.0))

    @pytest.mark.parametrize("i,j", SU2_BLOCKS)
    def test_block_positions(self, i: int, j: int) -> None:
        m = embed_su2(self.SU2, i, j)
        assert m[i, i] == self.SU2[0]
        assert m[i, j] == self.SU2[1]
        assert m[j, i] == self.SU2[2]
        assert m[j, j] == self.SU2[3]
        k = 3 - i - j  # untouched row/column
        for n in range(3):
            expected = Complex(1.0, 0.0) if n == k else Complex(0.0, 0.0)
            assert m[k, n] == expected
            assert m[n, k] == expected


class TestSU3:
    """gen: R * S * T"""

    @pytest.mark.parametrize("seed", range(10))
    def test_unit_determinant(self, seed: int) -> None:
        det = Color(seed=seed).gen().det()
        assert round(det.re, 2) == 1.0
        assert round(det.im, 2) == 0.0
        assert det.is_close(Complex(1.0, 0.0), tol=1e-10)

    def test_unitary(self) -> None:
        color = Color(seed=99)
        for _ in range(5):
            u = color.gen()
            assert (u.conj() * u).allclose(Matrix.identity(), tol=1e-12)
            assert u.unitarity_deviation() < 1e-24

    def test_not_identity(self) -> None:
        u = Color(seed=5).gen()
        assert not u.allclose(Matrix.identity(), tol=1e-3)

    def test_product_order(self) -> None:
        """gen() equals R*S*T built from three consecutive gen_su2 draws"""
        u = Color(seed=21).gen()
        ref = Color(seed=21)
        R, S, T = (embed_su2(ref.gen_su2(), i, j) for i, j in SU2_BLOCKS)
        assert u == R * S * T
        assert u != T * S * R


class TestSeeding:
    """Reproducible streams"""

    def test_same_seed_same_stream(self) -> None:
        a, b = Color(seed=7), Color(seed=7)
        for _ in range(3):
            assert a.gen() == b.gen()

    def test_manual_seed_rewinds(self) -> None:
        color = Color(seed=8)
        first = color.gen()
        color.gen()
        color.manual_seed(8)
        assert color.gen() == first

    def test_different_seeds_differ(self) -> None:
        assert Color(seed=1).gen() != Color(seed=2).gen()

    def test_unseeded_generators_work(self) -> None:
        assert Color().gen().det().is_close(Complex(1.0, 0.0), tol=1e-10)
