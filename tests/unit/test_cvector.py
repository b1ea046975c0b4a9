"""
Tests for su3lattice.cvector

Checks:
1. Norm and rescale of a real triplet
2. Hermitian dot product and its asymmetry
3. Componentwise add / sub and read-only indexing
"""

import pytest

from su3lattice.complex import Complex
from su3lattice.cvector import CVector


def _a() -> CVector:
    return CVector([Complex(1.0, 1.0), Complex(0.0, 1.0), Complex(1.0, 0.0)])


def _b() -> CVector:
    return CVector([Complex(2.0, 1.0), Complex(1.0, 0.0), Complex(1.0, 1.0)])


class TestNorm:
    """norm / norm_sqr / rescale"""

    def test_norm(self) -> None:
        assert CVector.from_reals([2.0, 3.0, 6.0]).norm() == 7.0

    def test_rescale_to_unit(self) -> None:
        b = CVector.from_reals([2.0, 3.0, 6.0]).rescale(Complex.from_real(1.0 / 7.0))
        assert round(b.norm(), 2) == 1.0
        assert round(b[0].norm(), 2) == 0.29

    def test_rescale_by_imaginary_unit_keeps_norm(self) -> None:
        v = _b()
        w = v.rescale(Complex(0.0, 1.0))
        assert w.norm_sqr() == pytest.approx(v.norm_sqr())
        assert w[0] == Complex(-1.0, 2.0)

    def test_default_is_zero(self) -> None:
        assert CVector().norm_sqr() == 0.0


class TestDot:
    """Hermitian inner product Σ conj(lhs_i) rhs_i"""

    def test_known_values(self) -> None:
        a, b = _a(), _b()
        ab = CVector.dot(a, b)
        ba = CVector.dot(b, a)
        assert (ab.re, ab.im) == (4.0, -1.0)
        assert (ba.re, ba.im) == (4.0, 1.0)

    @pytest.mark.parametrize("v", [_a(), _b(), CVector.from_reals([2.0, 3.0, 6.0])])
    def test_self_dot_is_norm_sqr(self, v: CVector) -> None:
        d = CVector.dot(v, v)
        assert d.im == pytest.approx(0.0, abs=1e-12)
        assert d.re == pytest.approx(v.norm_sqr())

    def test_asymmetry_is_conjugation(self) -> None:
        a = CVector([Complex(0.3, -1.2), Complex(2.0, 0.5), Complex(-0.7, 0.1)])
        b = CVector([Complex(-1.0, 0.4), Complex(0.25, 3.0), Complex(1.5, -2.0)])
        lhs = CVector.dot(a, b)
        rhs = CVector.dot(b, a).conj()
        assert lhs.is_close(rhs, tol=1e-12)
        # not symmetric in general
        assert not lhs.is_close(CVector.dot(b, a), tol=1e-6)


class TestComponentwise:
    """add / sub / indexing"""

    def test_add(self) -> None:
        c = CVector.from_reals([1.0, 2.0, 3.0]) + CVector.from_reals([4.0, 5.0, 6.0])
        assert [z.re for z in c] == [5.0, 7.0, 9.0]

    def test_sub(self) -> None:
        c = CVector.from_reals([1.0, 2.0, 3.0]) - CVector.from_reals([6.0, 5.0, 4.0])
        assert [z.re for z in c] == [-5.0, -3.0, -1.0]

    def test_indexing_returns_complex(self) -> None:
        v = _a()
        assert len(v) == 3
        assert v[1] == Complex(0.0, 1.0)
        assert v.tolist() == [Complex(1.0, 1.0), Complex(0.0, 1.0), Complex(1.0, 0.0)]

    def test_indexing_is_read_only(self) -> None:
        v = _a()
        with pytest.raises(TypeError):
            v[0] = Complex(9.0, 9.0)

    def test_wrong_length_rejected(self) -> None:
        with pytest.raises(AssertionError):
            CVector.from_reals([1.0, 2.0])
