# su3lattice/lattice.py
# =============================================================================
# EN: 4D periodic lattice of SU(3) links with the sequential sweep protocol.
# JA: SU(3) リンクを持つ4次元周期格子と逐次スイープ手続き。
# =============================================================================

from __future__ import annotations
from typing import Callable, Iterator, List, Optional, Tuple

import torch

from .color import Color
from .cvector import DTYPE, WIDTH
from .matrix import Matrix, dagger, eye3
from .utils import CSVLogger, SimpleLogger, Timer


NDIM = 4  # spacetime dimensions = link directions per site

STAPLE_MODES = ("identity", "wilson")

# EN: update(link, staples) -> replacement or None (link may be mutated in place)
# JA: update(link, staples) -> 置換行列 または None（その場での変更も可）
LinkUpdate = Callable[[Matrix, List[Matrix]], Optional[Matrix]]

Coords = Tuple[int, int, int, int]


class Lattice:
    r"""
    EN: size^4 sites × 4 directions of 3×3 links, stored as one complex128
        tensor `links` of shape (size^4, 4, 3, 3). Sites are flattened
        row-major over (x, y, z, t), t fastest.
        The lattice owns one `Color` used for hot starts and by update rules.
    JA: size^4 サイト × 4 方向の 3×3 リンクを形状 (size^4, 4, 3, 3) の
        complex128 テンソル `links` に格納。(x, y, z, t) の行優先で平坦化。

    Attributes:
        size: linear extent / 一辺のサイズ
        color: SU(3) sampler owned by this lattice
        staple_mode: "identity" (six identities) or "wilson" (Wilson staples)
        links: (size^4, 4, 3, 3) complex128 tensor
    """

    def __init__(
        self,
        size: int,
        color: Optional[Color] = None,
        staples: str = "identity",
        device: Optional[torch.device] = None,
    ) -> None:
        if int(size) < 1:
            raise ValueError(f"Lattice size must be >= 1, got {size}")
        if staples not in STAPLE_MODES:
            raise ValueError(f"Unknown staple mode {staples!r}; expected one of {STAPLE_MODES}")
        self.size = int(size)
        self.device = device if device is not None else torch.device("cpu")
        self.color = color if color is not None else Color(device=self.device)
        self.staple_mode = staples
        self.links = torch.zeros(self.size ** NDIM, NDIM, WIDTH, WIDTH, dtype=DTYPE, device=self.device)
        self._sweeps_done = 0

    # ----- starts / 初期配位 -----
    @classmethod
    def cold(cls, size: int, color: Optional[Color] = None, **kwargs) -> "Lattice":
        """
        EN: Cold start: every link is the identity (ordered vacuum).
        JA: コールドスタート：全リンクを単位行列に。
        """
        lat = cls(size, color=color, **kwargs)
        lat.links[:] = eye3(lat.device)
        return lat

    @classmethod
    def hot(cls, size: int, color: Optional[Color] = None, **kwargs) -> "Lattice":
        """
        EN: Hot start: every link an independent `color.gen()` sample.
        JA: ホットスタート：各リンクを `color.gen()` の独立サンプルに。
        """
        lat = cls(size, color=color, **kwargs)
        for site in lat.iter_sites():
            for mu in range(NDIM):
                lat.links[site, mu] = lat.color.gen().data
        return lat

    # ----- geometry / 幾何 -----
    @property
    def num_sites(self) -> int:
        return self.links.shape[0]

    def __len__(self) -> int:
        return self.num_sites

    def in_bounds(self, x: int, y: int, z: int, t: int) -> bool:
        return all(0 <= c < self.size for c in (x, y, z, t))

    def index(self, x: int, y: int, z: int, t: int) -> int:
        """(x, y, z, t) → linear site index (row-major)."""
        assert self.in_bounds(x, y, z, t), f"Coordinates {(x, y, z, t)} out of range for size {self.size}"
        L = self.size
        return ((x * L + y) * L + z) * L + t

    def coords(self, index: int) -> Coords:
        """Linear site index → (x, y, z, t)."""
        assert 0 <= index < self.num_sites, f"Site index {index} out of range"
        L = self.size
        rest, t = divmod(index, L)
        rest, z = divmod(rest, L)
        x, y = divmod(rest, L)
        return (x, y, z, t)

    def neighbor(self, index: int, mu: int, shift: int = 1) -> int:
        """Periodic neighbour index of `index` shifted by `shift` along mu."""
        assert 0 <= mu < NDIM, f"Direction {mu} out of range"
        c = list(self.coords(index))
        c[mu] = (c[mu] + shift) % self.size
        return self.index(*c)

    def iter_sites(self) -> Iterator[int]:
        """Sites in sweep order (increasing linear index)."""
        return iter(range(self.num_sites))

    # ----- link access / リンクアクセス -----
    def link(self, index: int, mu: int) -> Matrix:
        """
        EN: Mutable view of link U_mu(index); writes go to lattice storage.
        JA: リンク U_mu(index) の可変ビュー（書き込みは格子に反映）。
        """
        assert 0 <= mu < NDIM, f"Direction {mu} out of range"
        return Matrix(self.links[index, mu])

    def site_links(self, index: int) -> List[Matrix]:
        """The 4 link views leaving `index`, directions 0..3."""
        return [self.link(index, mu) for mu in range(NDIM)]

    def set_link(self, index: int, mu: int, value: Matrix) -> None:
        self.links[index, mu] = value.data

    # ----- staples / ステープル -----
    def staples(self, index: int, direction: int = 0) -> List[Matrix]:
        r"""
        EN: Six matrices describing the environment of link U_mu(x), mu=direction.
            "identity" mode: six identities.
            "wilson" mode, for each nu != mu in increasing order:
                forward  U_nu(x+mu) U_mu(x+nu)† U_nu(x)†
                backward U_nu(x+mu-nu)† U_mu(x-nu)† U_nu(x-nu)
            so that Σ ReTr(U_mu(x) · staple) is the local Wilson-action term.
        JA: リンク U_mu(x) の周囲環境を表す 6 個の行列。
            "wilson" では各 nu != mu について前方・後方ステープルを返す。
        """
        assert 0 <= direction < NDIM, f"Direction {direction} out of range"
        if self.staple_mode == "identity":
            return [Matrix.identity(self.device) for _ in range(2 * (NDIM - 1))]

        mu = direction
        U = self.links
        x_mu = self.neighbor(index, mu, 1)
        out = []
        for nu in range(NDIM):
            if nu == mu:
                continue
            x_nu = self.neighbor(index, nu, 1)
            x_mnu = self.neighbor(index, nu, -1)
            x_mu_mnu = self.neighbor(x_mu, nu, -1)
            forward = U[x_mu, nu] @ dagger(U[x_nu, mu]) @ dagger(U[index, nu])
            backward = dagger(U[x_mu_mnu, nu]) @ dagger(U[x_mnu, mu]) @ U[x_mnu, nu]
            out.append(Matrix(forward))
            out.append(Matrix(backward))
        return out

    # ----- sweeps / スイープ -----
    def sweep(
        self,
        update: LinkUpdate,
        direction: int = 0,
        logger: Optional[SimpleLogger] = None,
    ) -> int:
        r"""
        EN:
          One pass over all sites in increasing index order. For each site the
          staples are computed *after* every earlier site was updated
          (Gauss–Seidel ordering, not checkerboard), then
              update(link_view, staples)
          is called. The update may mutate `link_view` in place and/or return
          a replacement Matrix, which is written back.

        JA:
          全サイトを添字順に1回走査する。各サイトのステープルは、それ以前の
          サイトの更新後に計算する（ガウス・ザイデル型、チェッカーボードではない）。

        Returns:
            number of sites whose update returned a replacement
        """
        assert 0 <= direction < NDIM, f"Direction {direction} out of range"
        timer = Timer()
        replaced = 0
        for site in self.iter_sites():
            staples = self.staples(site, direction)
            link = self.link(site, direction)
            new = update(link, staples)
            if new is not None:
                link.assign(new)
                replaced += 1
        self._sweeps_done += 1

        if logger:
            logger.dict({
                "sweep": self._sweeps_done,
                "sites": self.num_sites,
                "direction": direction,
                "replaced": replaced,
                "secs": f"{timer.elapsed().total_seconds():.3f}",
            })
        return replaced

    def sweeps(
        self,
        update: LinkUpdate,
        count: int,
        direction: int = 0,
        logger: Optional[SimpleLogger] = None,
        csv_logger: Optional[CSVLogger] = None,
    ) -> List[int]:
        """
        EN: Repeat `sweep` `count` times; returns replaced-counts per sweep.
        JA: `sweep` を `count` 回繰り返し、各回の置換数を返す。
        """
        history = []
        for _ in range(count):
            replaced = self.sweep(update, direction=direction, logger=logger)
            history.append(replaced)
            if csv_logger:
                csv_logger.write({
                    "sweep": self._sweeps_done,
                    "size": self.size,
                    "direction": direction,
                    "replaced": replaced,
                })
        return history

    @property
    def sweeps_done(self) -> int:
        return self._sweeps_done
