# su3lattice/cvector.py
# =============================================================================
# EN: Colour triplets: 3-component complex vectors in the fundamental rep.
# JA: カラー三重項（基本表現の3成分複素ベクトル）。
# =============================================================================

from __future__ import annotations
from typing import Iterable, Iterator, List, Optional, Sequence

import math

import torch

from .complex import Complex, Number


DTYPE = torch.complex128
WIDTH = 3


# -----------------------------------------------------------------------------
# Helpers / 補助関数
# -----------------------------------------------------------------------------
def to_tensor(values: Iterable[Number], shape: Sequence[int],
              device: Optional[torch.device] = None) -> torch.Tensor:
    """
    EN: Pack numbers / Complex values into a complex128 tensor of `shape`.
    JA: 数値や Complex を complex128 テンソルに詰める。
    """
    flat = [complex(Complex.coerce(v)) for v in values]
    expected = 1
    for n in shape:
        expected *= n
    assert len(flat) == expected, f"Expected {expected} values, got {len(flat)}"
    return torch.tensor(flat, dtype=DTYPE, device=device).reshape(*shape)


def to_complex(z: torch.Tensor) -> Complex:
    """0-dim complex tensor → Complex."""
    value = z.item()
    return Complex(value.real, value.imag)


# -----------------------------------------------------------------------------
# Main class
# -----------------------------------------------------------------------------
class CVector:
    r"""
    EN: Fixed-length (3) complex vector. Entries are read-only through v[i].
    JA: 長さ3固定の複素ベクトル。v[i] で成分を読み出す（書き込み不可）。
    """

    __slots__ = ("data",)

    def __init__(self, values: Optional[Iterable[Number]] = None) -> None:
        if values is None:
            self.data = torch.zeros(WIDTH, dtype=DTYPE)
        else:
            self.data = to_tensor(values, (WIDTH,))

    @classmethod
    def from_reals(cls, values: Sequence[float]) -> "CVector":
        """EN: Real entries, zero imaginary parts. JA: 実数成分から生成。"""
        return cls(Complex.from_real(v) for v in values)

    @classmethod
    def from_tensor(cls, data: torch.Tensor) -> "CVector":
        assert tuple(data.shape) == (WIDTH,), "CVector tensor must have shape (3,)"
        out = cls.__new__(cls)
        out.data = data.to(DTYPE)
        return out

    # ----- access / アクセス -----
    def __getitem__(self, index: int) -> Complex:
        return to_complex(self.data[index])

    def __len__(self) -> int:
        return WIDTH

    def __iter__(self) -> Iterator[Complex]:
        for i in range(WIDTH):
            yield self[i]

    def tolist(self) -> List[Complex]:
        return list(self)

    # ----- arithmetic / 演算 -----
    def __add__(self, rhs: "CVector") -> "CVector":
        return CVector.from_tensor(self.data + rhs.data)

    def __sub__(self, rhs: "CVector") -> "CVector":
        return CVector.from_tensor(self.data - rhs.data)

    def rescale(self, factor: Number) -> "CVector":
        """Multiply every component by a complex factor."""
        return CVector.from_tensor(self.data * complex(Complex.coerce(factor)))

    def norm_sqr(self) -> float:
        """Σ |v_i|²"""
        return float((self.data.real ** 2 + self.data.imag ** 2).sum().item())

    def norm(self) -> float:
        return math.sqrt(self.norm_sqr())

    @staticmethod
    def dot(lhs: "CVector", rhs: "CVector") -> Complex:
        r"""
        EN: Hermitian inner product Σ conj(lhs_i)·rhs_i.
            Not symmetric: dot(a, b) == conj(dot(b, a)).
        JA: エルミート内積 Σ conj(lhs_i)·rhs_i（対称ではない）。
        """
        return to_complex((lhs.data.conj() * rhs.data).sum())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CVector):
            return NotImplemented
        return bool(torch.equal(self.data, other.data))

    __hash__ = None

    def __repr__(self) -> str:
        return f"CVector({self.tolist()!r})"
