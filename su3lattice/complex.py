# su3lattice/complex.py
# =============================================================================
# EN: Scalar complex numbers (double precision) used as matrix/vector entries.
# JA: 行列・ベクトル成分として使う倍精度の複素スカラー。
# =============================================================================

from __future__ import annotations
from dataclasses import dataclass
from typing import Union

import math


Number = Union[int, float, complex, "Complex"]


@dataclass(frozen=True)
class Complex:
    r"""
    EN: Immutable (re, im) pair. Arithmetic follows the textbook formulas,
        e.g. (a+bi)(c+di) = (ac−bd) + (ad+bc)i.
    JA: 不変な (re, im) の組。演算は教科書通りの公式に従う。
    """
    re: float = 0.0
    im: float = 0.0

    # ----- constructors / 生成 -----
    @classmethod
    def from_real(cls, value: float) -> "Complex":
        """Real scalar with zero imaginary part."""
        return cls(float(value), 0.0)

    @classmethod
    def coerce(cls, value: Number) -> "Complex":
        """
        EN: Accept Complex, int, float or builtin complex.
        JA: Complex / int / float / 組込み complex を受け付ける。
        """
        if isinstance(value, Complex):
            return value
        if isinstance(value, complex):
            return cls(value.real, value.imag)
        if isinstance(value, (int, float)):
            return cls.from_real(value)
        raise TypeError(f"cannot interpret {type(value).__name__} as Complex")

    # ----- norms / ノルム -----
    def norm_sqr(self) -> float:
        return self.re * self.re + self.im * self.im

    def norm(self) -> float:
        return math.sqrt(self.norm_sqr())

    def conj(self) -> "Complex":
        return Complex(self.re, -self.im)

    # ----- arithmetic / 演算 -----
    def __add__(self, rhs: Number) -> "Complex":
        rhs = Complex.coerce(rhs)
        return Complex(self.re + rhs.re, self.im + rhs.im)

    def __sub__(self, rhs: Number) -> "Complex":
        rhs = Complex.coerce(rhs)
        return Complex(self.re - rhs.re, self.im - rhs.im)

    def __mul__(self, rhs: Number) -> "Complex":
        rhs = Complex.coerce(rhs)
        return Complex(
            self.re * rhs.re - self.im * rhs.im,
            self.re * rhs.im + self.im * rhs.re,
        )

    def __truediv__(self, rhs: Number) -> "Complex":
        """
        EN: a / b = a·conj(b) / |b|². Raises ZeroDivisionError if |b|² == 0.
        JA: a / b = a·conj(b) / |b|²。|b|² が 0 なら ZeroDivisionError。
        """
        rhs = Complex.coerce(rhs)
        n = rhs.norm_sqr()
        num = self * rhs.conj()
        return Complex(num.re / n, num.im / n)

    def __radd__(self, lhs: Number) -> "Complex":
        return Complex.coerce(lhs) + self

    def __rsub__(self, lhs: Number) -> "Complex":
        return Complex.coerce(lhs) - self

    def __rmul__(self, lhs: Number) -> "Complex":
        return Complex.coerce(lhs) * self

    def __rtruediv__(self, lhs: Number) -> "Complex":
        return Complex.coerce(lhs) / self

    def __neg__(self) -> "Complex":
        return Complex(-self.re, -self.im)

    # ----- conversion / 変換 -----
    def __complex__(self) -> complex:
        return complex(self.re, self.im)

    def is_close(self, other: Number, tol: float = 1e-12) -> bool:
        """Componentwise |Δre|, |Δim| <= tol."""
        other = Complex.coerce(other)
        return abs(self.re - other.re) <= tol and abs(self.im - other.im) <= tol

    def __repr__(self) -> str:
        sign = "+" if self.im >= 0 or math.isnan(self.im) else "-"
        return f"Complex({self.re!r} {sign} {abs(self.im)!r}i)"
