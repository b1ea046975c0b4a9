# su3lattice/color.py
# =============================================================================
# EN: Random SU(3) elements via embedded SU(2) subgroups (Cabibbo–Marinari).
# JA: SU(2) 部分群の埋め込みによる SU(3) 乱数要素の生成（Cabibbo–Marinari）。
# =============================================================================

from __future__ import annotations
from typing import Optional, Tuple

import math
import torch

from .complex import Complex
from .matrix import Matrix, eye3


# EN: Radius of the SU(2) vector part; controls distance from identity.
# JA: SU(2) ベクトル部の半径。単位元からの距離を決める。
SPREAD = 0.5

# EN: Stabilizer added to the rescale denominator.
# JA: リスケール分母に足す安定化項。
EPSILON = 1e-23

# EN: (i, j) index pairs of the R, S, T embeddings (applied in this order).
# JA: R, S, T 埋め込みの添字対（この順で掛ける）。
SU2_BLOCKS: Tuple[Tuple[int, int], ...] = ((0, 1), (0, 2), (1, 2))

SU2Entries = Tuple[Complex, Complex, Complex, Complex]


# -----------------------------------------------------------------------------
# SU(2) → SU(3) embedding / 埋め込み
# -----------------------------------------------------------------------------
def embed_su2(su2: SU2Entries, i: int, j: int,
              device: Optional[torch.device] = None) -> Matrix:
    r"""
    EN: Identity 3×3 with the principal (i, j) block replaced by the 2×2
        matrix [[a, b], [c, d]] given row-major as `su2 = (a, b, c, d)`.
    JA: 単位行列の (i, j) 主小行列を 2×2 行列 [[a, b], [c, d]] で置き換える。
    """
    assert 0 <= i < j <= 2, "Expected 0 <= i < j <= 2"
    M = Matrix(eye3(device))
    a, b, c, d = su2
    M[i, i] = a
    M[i, j] = b
    M[j, i] = c
    M[j, j] = d
    return M


# -----------------------------------------------------------------------------
# Generator / 生成器
# -----------------------------------------------------------------------------
class Color:
    r"""
    EN: Stateful SU(3) sampler owning a `torch.Generator`.
        Each `gen()` is independent apart from advancing the generator.
        Not thread-safe: one Color per update stream.
    JA: `torch.Generator` を保持する SU(3) サンプラ。
        `gen()` の各呼び出しは乱数列が進む以外は独立。スレッド非安全。

    Attributes:
        spread: SU(2) vector-part radius (default SPREAD)
        generator: owned random source
    """

    def __init__(
        self,
        seed: Optional[int] = None,
        spread: float = SPREAD,
        device: Optional[torch.device] = None,
    ) -> None:
        if not 0.0 <= spread <= 1.0:
            raise ValueError(f"spread must lie in [0, 1], got {spread}")
        self.spread = float(spread)
        self.device = device if device is not None else torch.device("cpu")
        self.generator = torch.Generator(device="cpu")
        if seed is None:
            self.generator.seed()  # non-deterministic / 非決定的
        else:
            self.generator.manual_seed(int(seed))

    def manual_seed(self, seed: int) -> "Color":
        """EN: Reseed for reproducible streams. JA: 再現性のための再シード。"""
        self.generator.manual_seed(int(seed))
        return self

    def gen_su2(self) -> SU2Entries:
        r"""
        EN:
          Draw r ~ U[-0.5, 0.5)^4, then push it onto the unit 3-sphere:
              (r1, r2, r3) ← spread · (r1, r2, r3) / (|(r1, r2, r3)| + EPSILON)
              r0           ← sign(r0) · sqrt(1 − spread²)
          and return the row-major entries of
              [[r0 + r3 i,  r2 + r1 i],
               [−r2 + r1 i, r0 − r3 i]].
        JA:
          一様乱数 r を単位 3 球面上に載せ、上の 2×2 SU(2) 行列の成分を返す。
        """
        r = (torch.rand(4, generator=self.generator, dtype=torch.float64) - 0.5).tolist()

        norm = math.sqrt(r[1] * r[1] + r[2] * r[2] + r[3] * r[3])
        rescale = self.spread / (norm + EPSILON)

        # copysign keeps the sign of ±0.0 (torch.sign would give 0)
        r0 = math.sqrt(1.0 - self.spread * self.spread) * math.copysign(1.0, r[0])
        r1 = r[1] * rescale
        r2 = r[2] * rescale
        r3 = r[3] * rescale

        return (
            Complex(r0, r3),
            Complex(r2, r1),
            Complex(-r2, r1),
            Complex(r0, -r3),
        )

    def gen(self) -> Matrix:
        """
        EN: SU(3) proposal R·S·T from three independent embedded SU(2) samples.
        JA: 独立な 3 つの埋め込み SU(2) の積 R·S·T を返す。
        """
        R, S, T = (embed_su2(self.gen_su2(), i, j, device=self.device) for i, j in SU2_BLOCKS)
        return R * S * T
