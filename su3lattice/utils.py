# su3lattice/utils.py
# =============================================================================
# EN: Bookkeeping for sweep runs: timing, text/CSV logs, key=value formatting.
# JA: スイープ実行の記録用ユーティリティ（計時、テキスト/CSVログ、k=v 整形）。
# =============================================================================

import os
import sys
import csv
from datetime import datetime, timedelta
from typing import Optional, Dict, Any


# -----------------------------------------------------------------------------
# Time formatting / 時間整形
# -----------------------------------------------------------------------------
def format_td(dt: timedelta, show_seconds: bool = True) -> str:
    """
    EN: H:MM:SS (or H:MM) rendering of a timedelta.
    JA: timedelta を H:MM:SS（または H:MM）で表示。
    """
    h, rest = divmod(int(dt.total_seconds()), 3600)
    m, s = divmod(rest, 60)
    return f"{h:d}:{m:02d}:{s:02d}" if show_seconds else f"{h:d}:{m:02d}"


def now_str(fmt: str = "%Y-%m-%d %H:%M:%S") -> str:
    return datetime.now().strftime(fmt)


def kv_str(d: Dict[str, Any], sep: str = " ", kv_join: str = "=") -> str:
    """
    EN: {"sweep": 3, "replaced": 256} -> "sweep=3 replaced=256"
    JA: 辞書を1行の "k=v" 列に整形。
    """
    return sep.join(f"{k}{kv_join}{v}" for k, v in d.items())


# -----------------------------------------------------------------------------
# Timer / タイマー
# -----------------------------------------------------------------------------
class Timer:
    """
    EN: Wall-clock timer; `lap()` returns time since the previous lap.
    JA: 壁時計タイマー。`lap()` は前回からの経過時間。
    """

    def __init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        self.t0 = datetime.now()
        self.last = self.t0

    def elapsed(self) -> timedelta:
        return datetime.now() - self.t0

    def lap(self) -> timedelta:
        now = datetime.now()
        dt, self.last = now - self.last, now
        return dt


# -----------------------------------------------------------------------------
# Filesystem helpers / ファイルシステム補助
# -----------------------------------------------------------------------------
def ensure_dir(path: str) -> str:
    os.makedirs(path, exist_ok=True)
    return path


# -----------------------------------------------------------------------------
# Text logger / テキストロガー
# -----------------------------------------------------------------------------
class SimpleLogger:
    """
    EN: Timestamped line logger appending to a file, optionally mirrored to stdout.
    JA: タイムスタンプ付きでファイルへ追記するロガー（標準出力にも複製可）。

    Example:
        logger = SimpleLogger("runs/sweeps.log")
        lattice.sweep(update, logger=logger)
        logger.close()
    """

    def __init__(self, filepath: str, mirror_stdout: bool = True, append: bool = True) -> None:
        ensure_dir(os.path.dirname(filepath) or ".")
        self.filepath = filepath
        self.mirror = mirror_stdout
        self.fp = open(filepath, "a" if append else "w", encoding="utf-8")

    def close(self) -> None:
        if not self.fp.closed:
            self.fp.close()

    def __enter__(self) -> "SimpleLogger":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def _write(self, msg: str) -> None:
        line = f"[{now_str()}] {msg}\n"
        self.fp.write(line)
        self.fp.flush()
        if self.mirror:
            sys.stdout.write(line)
            sys.stdout.flush()

    def info(self, msg: str) -> None:
        self._write(msg)

    def dict(self, kv: Dict[str, Any], prefix: Optional[str] = None) -> None:
        """EN: One key=value line. JA: k=v を1行で出力。"""
        pre = f"{prefix} " if prefix else ""
        self._write(pre + kv_str(kv))


# -----------------------------------------------------------------------------
# CSV logger / CSVロガー
# -----------------------------------------------------------------------------
class CSVLogger:
    """
    EN: Append dict rows to a CSV file; header is written once.
    JA: dict 行を CSV に追記（ヘッダは初回のみ）。
    """

    def __init__(self, filepath: str) -> None:
        ensure_dir(os.path.dirname(filepath) or ".")
        self.filepath = filepath
        self._has_header = os.path.exists(filepath) and os.path.getsize(filepath) > 0

    def write(self, row: Dict[str, Any]) -> None:
        with open(self.filepath, "a", newline="", encoding="utf-8") as f:
            writer = csv.DictWriter(f, fieldnames=list(row.keys()))
            if not self._has_header:
                writer.writeheader()
                self._has_header = True
            writer.writerow(row)
