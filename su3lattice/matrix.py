# su3lattice/matrix.py
# =============================================================================
# EN: 3×3 complex matrices (gauge-link representation of SU(3)).
# JA: 3×3 複素行列（SU(3) ゲージリンクの表現）。
# =============================================================================

from __future__ import annotations
from typing import Iterable, Optional, Union

import torch

from .complex import Complex, Number
from .cvector import DTYPE, WIDTH, CVector, to_complex, to_tensor


# -----------------------------------------------------------------------------
# Helpers / 補助関数
# -----------------------------------------------------------------------------
def eye3(device: Optional[torch.device] = None) -> torch.Tensor:
    """3x3 complex identity tensor."""
    return torch.eye(WIDTH, dtype=DTYPE, device=device)


def dagger(M: torch.Tensor) -> torch.Tensor:
    """Matrix conjugate transpose (dagger), materialized."""
    return M.conj().transpose(-1, -2).resolve_conj()


# -----------------------------------------------------------------------------
# Main class
# -----------------------------------------------------------------------------
class Matrix:
    r"""
    EN: Row-major 3×3 complex matrix backed by a (3,3) complex128 tensor.
        Unitarity / det=1 are NOT enforced; SU(3) membership is a contract
        upheld by the producer (see `color.Color`).
        A Matrix may wrap a view into lattice storage: item assignment and
        `assign()` then write through to the lattice.
    JA: (3,3) complex128 テンソルで保持する行優先の 3×3 複素行列。
        ユニタリ性・det=1 は強制しない（生成側の責任）。
        格子ストレージのビューを包む場合、代入はそのまま格子に反映される。
    """

    __slots__ = ("data",)

    def __init__(self, data: Optional[torch.Tensor] = None) -> None:
        if data is None:
            data = torch.zeros(WIDTH, WIDTH, dtype=DTYPE)
        assert tuple(data.shape) == (WIDTH, WIDTH), "Matrix tensor must have shape (3,3)"
        assert data.dtype == DTYPE, "Matrix tensor must be complex128"
        self.data = data

    # ----- constructors / 生成 -----
    @classmethod
    def from_values(cls, values: Iterable[Number],
                    device: Optional[torch.device] = None) -> "Matrix":
        """
        EN: Nine reals or Complex values in row-major order.
        JA: 行優先の 9 個の実数または Complex から生成。
        """
        return cls(to_tensor(values, (WIDTH, WIDTH), device=device))

    @classmethod
    def identity(cls, device: Optional[torch.device] = None) -> "Matrix":
        """Group identity (the cold-start link)."""
        return cls(eye3(device))

    def copy(self) -> "Matrix":
        """Detached copy (never aliases lattice storage)."""
        return Matrix(self.data.clone())

    def assign(self, other: "Matrix") -> "Matrix":
        """
        EN: Overwrite entries in place (writes through lattice views).
        JA: 成分をその場で上書き（格子ビューにも反映）。
        """
        self.data.copy_(other.data)
        return self

    # ----- access / アクセス -----
    def __getitem__(self, index) -> Complex:
        row, col = index
        return to_complex(self.data[row, col])

    def __setitem__(self, index, value: Number) -> None:
        row, col = index
        self.data[row, col] = complex(Complex.coerce(value))

    # ----- arithmetic / 演算 -----
    def __add__(self, rhs: "Matrix") -> "Matrix":
        return Matrix(self.data + rhs.data)

    def __sub__(self, rhs: "Matrix") -> "Matrix":
        return Matrix(self.data - rhs.data)

    def __mul__(self, rhs: Union["Matrix", Number]) -> "Matrix":
        """
        EN: Matrix product result[r][c] = Σ_i self[r][i]·rhs[i][c]
            (order matters: path ordering of gauge links), or scaling by a number.
        JA: 行列積（順序に意味がある）、または数によるスカラー倍。
        """
        if isinstance(rhs, Matrix):
            return Matrix(self.data @ rhs.data)
        return Matrix(self.data * complex(Complex.coerce(rhs)))

    def __rmul__(self, lhs: Number) -> "Matrix":
        return Matrix(complex(Complex.coerce(lhs)) * self.data)

    def __matmul__(self, rhs: "Matrix") -> "Matrix":
        return Matrix(self.data @ rhs.data)

    def mul_vector(self, v: CVector) -> CVector:
        """Act on a colour triplet: (M v)_r = Σ_c M[r][c]·v[c]."""
        return CVector.from_tensor(self.data @ v.data)

    def conj(self) -> "Matrix":
        r"""
        EN: Hermitian adjoint M†, result[r][c] = conj(M[c][r]).
            Not an elementwise conjugate; for unitary M this is the inverse.
        JA: エルミート共役 M†（成分ごとの複素共役ではない）。
        """
        return Matrix(dagger(self.data))

    def det(self) -> Complex:
        r"""
        EN: Cofactor expansion along the first row:
              m00(m11 m22 − m12 m21) − m01(m10 m22 − m12 m20) + m02(m10 m21 − m11 m20)
        JA: 第1行に沿った余因子展開。
        """
        m = self.data
        d = (
            m[0, 0] * (m[1, 1] * m[2, 2] - m[1, 2] * m[2, 1])
            - m[0, 1] * (m[1, 0] * m[2, 2] - m[1, 2] * m[2, 0])
            + m[0, 2] * (m[1, 0] * m[2, 1] - m[1, 1] * m[2, 0])
        )
        return to_complex(d)

    def trace(self) -> Complex:
        return to_complex(torch.diagonal(self.data).sum())

    def unitarity_deviation(self) -> float:
        """
        EN: Mean |M†M − I|² over entries. Diagnostic only (0 for exact unitary).
        JA: |M†M − I|² の平均。診断用（厳密ユニタリなら 0）。
        """
        diff = dagger(self.data) @ self.data - eye3(self.data.device)
        return float((diff.abs() ** 2).mean().item())

    # ----- comparison / 比較 -----
    def allclose(self, other: "Matrix", tol: float = 1e-12) -> bool:
        return bool(torch.allclose(self.data, other.data, rtol=0.0, atol=tol))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return bool(torch.equal(self.data, other.data))

    __hash__ = None

    def __repr__(self) -> str:
        rows = [[complex(z) for z in row] for row in self.data.tolist()]
        return f"Matrix({rows!r})"
