# su3lattice/config.py
# =============================================================================
# EN: Run configuration and a small driver that builds a lattice and sweeps it.
# JA: 実行設定と、格子を構築してスイープする小さなドライバ。
# =============================================================================

import time
from datetime import timedelta
from typing import Any, Callable, Dict

from .color import Color, SPREAD
from .lattice import Lattice, LinkUpdate
from .utils import CSVLogger, SimpleLogger, format_td


DEFAULTS: Dict[str, Any] = {
    "size": 4,              # lattice extent per dimension
    "start": "cold",        # "cold" | "hot"
    "staples": "identity",  # "identity" | "wilson"
    "seed": None,           # None = non-deterministic generator
    "spread": SPREAD,       # SU(2) proposal radius
    "direction": 0,         # link direction updated by each sweep
    "sweeps": 1,
    "logfile": None,        # text log path (None = disabled)
    "csv": None,            # per-sweep CSV path (None = disabled)
    "quiet": False,
}


# ----------------------------------------------------------------------
# Config container
# ----------------------------------------------------------------------
class LatticeConfig:
    """
    EN: Attribute container for run parameters; unknown keys are kept as-is.
    JA: 実行パラメータの属性コンテナ。未知のキーもそのまま保持する。
    """
    def __init__(self, **kwargs):
        self.__dict__.update(DEFAULTS)
        self.__dict__.update(kwargs)

    def as_dict(self) -> Dict[str, Any]:
        return dict(self.__dict__)

    def __repr__(self) -> str:
        body = ", ".join(f"{k}={v!r}" for k, v in self.__dict__.items())
        return f"LatticeConfig({body})"


# ----------------------------------------------------------------------
# Builders / driver
# ----------------------------------------------------------------------
def build_lattice(cfg: LatticeConfig) -> Lattice:
    """
    EN: Seeded Color + cold or hot lattice from a config.
    JA: 設定からシード済み Color とコールド/ホット格子を作る。
    """
    color = Color(seed=cfg.seed, spread=cfg.spread)
    if cfg.start == "cold":
        return Lattice.cold(cfg.size, color=color, staples=cfg.staples)
    if cfg.start == "hot":
        return Lattice.hot(cfg.size, color=color, staples=cfg.staples)
    raise ValueError(f"Unknown start {cfg.start!r}; expected 'cold' or 'hot'")


def run_sweeps(cfg: LatticeConfig, make_update: Callable[[Lattice], LinkUpdate]) -> Dict[str, Any]:
    """
    EN: Build the lattice, create the update rule with `make_update(lattice)`
        (so it can draw proposals from `lattice.color`), sweep `cfg.sweeps`
        times and return results including the final lattice.
    JA: 格子を構築し、`make_update(lattice)` で更新則を作って `cfg.sweeps` 回
        スイープし、最終格子を含む結果を辞書で返す。
    """
    lattice = build_lattice(cfg)
    update = make_update(lattice)

    logger = None
    if not cfg.quiet and cfg.logfile:
        logger = SimpleLogger(cfg.logfile, mirror_stdout=True)
    csvlogger = CSVLogger(cfg.csv) if cfg.csv else None

    start_time = time.time()
    try:
        if logger:
            logger.dict({"size": cfg.size, "start": cfg.start, "staples": cfg.staples,
                         "seed": cfg.seed, "sweeps": cfg.sweeps}, prefix="run")
        history = lattice.sweeps(update, cfg.sweeps, direction=cfg.direction,
                                 logger=logger, csv_logger=csvlogger)
        total_time = time.time() - start_time
        if logger:
            logger.info(f"Finished: sweeps={cfg.sweeps}, replaced={sum(history)}, "
                        f"time={format_td(timedelta(seconds=total_time))}")
    finally:
        if logger:
            logger.close()

    return {
        "lattice": lattice,
        "replaced": history,
        "total_time": total_time,
        "cfg": cfg.as_dict(),
    }
