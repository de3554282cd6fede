from __future__ import annotations

import shutil
import signal
import sys
from dataclasses import dataclass
from typing import Callable

import colorama

from karaoke_sync.sync.resolver import format_clock, fraction

CSI = "\x1b["


def _sgr(*codes: int) -> str:
    return CSI + ";".join(str(c) for c in codes) + "m"


@dataclass(frozen=True, slots=True)
class Theme:
    title: str = _sgr(36, 1)  # cyan bold
    current: str = _sgr(32, 1)  # green bold
    dim: str = _sgr(90)  # bright black
    progress: str = _sgr(35)  # magenta
    warning: str = _sgr(33, 1)  # yellow bold
    reset: str = _sgr(0)


def progress_line(position_ms: int, duration_ms: int, width: int = 30) -> str:
    """
    "1:15 / 3:20 [#####.....]  37%". The percentage may exceed 100 when the
    position overruns the duration; the bar itself stops at full.
    """
    frac = fraction(position_ms, duration_ms)
    filled = min(int(frac * width), width)
    bar = "#" * filled + "." * (width - filled)
    return f"{format_clock(position_ms)} / {format_clock(duration_ms)} [{bar}] {int(frac * 100):3d}%"


class AnsiRenderer:
    def __init__(self, use_alt_screen: bool = True, theme: Theme | None = None):
        self.use_alt_screen = use_alt_screen
        self.theme = theme or Theme()
        self._entered = False
        self._resize_handler: Callable[..., None] | None = None
        self._last_render_args: tuple[str, list[str], int, int, str | None] | None = None

    def __enter__(self):
        self.enter()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.exit()

    def enter(self) -> None:
        if self._entered:
            return
        colorama.just_fix_windows_console()
        if self.use_alt_screen:
            sys.stdout.write(CSI + "?1049h")  # alt screen
        sys.stdout.write(CSI + "?25l")  # hide cursor
        sys.stdout.write(CSI + "H" + CSI + "2J")  # home + clear
        sys.stdout.flush()
        self._entered = True

        def _on_resize(signum=None, frame=None):
            if self._last_render_args:
                self.render(*self._last_render_args)

        self._resize_handler = _on_resize
        if hasattr(signal, "SIGWINCH"):
            signal.signal(signal.SIGWINCH, _on_resize)

    def exit(self) -> None:
        if not self._entered:
            return
        if self._resize_handler and hasattr(signal, "SIGWINCH"):
            signal.signal(signal.SIGWINCH, signal.SIG_DFL)
        self._resize_handler = None
        sys.stdout.write(self.theme.reset)
        sys.stdout.write(CSI + "?25h")  # show cursor
        if self.use_alt_screen:
            sys.stdout.write(CSI + "?1049l")  # normal screen
        sys.stdout.flush()
        self._entered = False
        self._last_render_args = None

    def frame(
        self,
        title: str,
        lines: list[str],
        current_idx: int,
        context_lines: int = 2,
        footer: str | None = None,
        rows: int = 24,
    ) -> list[str]:
        # title + optional footer are fixed, the rest is a window of lyric lines
        body_rows = max(rows - 1 - (1 if footer is not None else 0), 1)

        if current_idx < 0:
            start = 0
        else:
            start = max(current_idx - context_lines, 0)
        end = min(start + body_rows, len(lines))
        start = max(end - body_rows, 0)

        out: list[str] = [f"{self.theme.title}♫ {title} ♫{self.theme.reset}"]
        for i in range(start, end):
            style = self.theme.current if i == current_idx else self.theme.dim
            out.append(f"{style}{lines[i]}{self.theme.reset}")
        if footer is not None:
            out.append(f"{self.theme.progress}{footer}{self.theme.reset}")
        return out

    def render(
        self,
        title: str,
        lines: list[str],
        current_idx: int,
        context_lines: int = 2,
        footer: str | None = None,
    ) -> None:
        self._last_render_args = (title, lines, current_idx, context_lines, footer)

        _cols, rows = shutil.get_terminal_size(fallback=(80, 24))
        out = self.frame(title, lines, current_idx, context_lines, footer, rows=rows)

        sys.stdout.write(CSI + "H" + CSI + "2J")
        sys.stdout.write("\n".join(out))
        sys.stdout.write(self.theme.reset)
        sys.stdout.flush()
