import os, re, ctypes, sys
from datetime import datetime
from pathlib import Path

RESET = "\x1b[0m"
BOLD = "\x1b[1m"
DIM = "\x1b[2m"
RED = "\x1b[31m"
GREEN = "\x1b[32m"
YELLOW = "\x1b[33m"
MAGENTA = "\x1b[35m"
CYAN = "\x1b[36m"

def C256(n: int) -> str:
    return f"\x1b[38;5;{n}m"

ORANGE2 = C256(208)
ORANGE1 = C256(214)
GRAY    = C256(245)
WHITE   = C256(255)

_ANSI = re.compile(r"\x1b\[[0-9;]*m")

def strip_ansi(s: str) -> str:
    return _ANSI.sub("", s)

class Console:
    """
    Leveled log sink for one run. Every line goes to the terminal (colored)
    and, once open_log() was called, to a plain-text run log in the same order.
    """
    def __init__(self, debug: bool=False, color: bool=True, stream=None):
        self.debug_enabled = debug
        self.color = color
        self.stream = stream
        self.log_path: Path | None = None
        self._log_fp = None

    def enable_windows_ansi_utf8(self):
        if os.name != "nt":
            return
        try:
            k32 = ctypes.windll.kernel32
            hOut = k32.GetStdHandle(-11)
            mode = ctypes.c_uint32()
            if k32.GetConsoleMode(hOut, ctypes.byref(mode)):
                k32.SetConsoleMode(hOut, mode.value | 0x0004)
            k32.SetConsoleOutputCP(65001)
            k32.SetConsoleCP(65001)
        except Exception:
            pass

    def open_log(self, log_dir: Path) -> Path:
        log_dir.mkdir(parents=True, exist_ok=True)
        self.log_path = log_dir / f"run-{datetime.now().strftime('%Y%m%d-%H%M%S')}.log"
        self._log_fp = open(self.log_path, "a", encoding="utf-8", errors="replace")
        return self.log_path

    def close(self):
        if self._log_fp:
            self._log_fp.flush()
            self._log_fp.close()
            self._log_fp = None

    def _emit(self, level: str, prefix: str, style: str, msg):
        text = str(msg)
        line = f"{style}{prefix}{text}{RESET}" if self.color else strip_ansi(f"{prefix}{text}")
        print(line, file=self.stream or sys.stdout)
        if self._log_fp:
            stamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
            self._log_fp.write(f"{stamp} {level:<5} {strip_ansi(text)}\n")
            self._log_fp.flush()

    def header(self, title: str):
        rule = "=" * 80
        self._emit("INFO", "", f"{ORANGE2}{BOLD}", rule)
        self._emit("INFO", "", f"{ORANGE2}{BOLD}", title)
        self._emit("INFO", "", f"{ORANGE2}{BOLD}", rule)

    def plain(self, msg): self._emit("INFO", "", "", msg)
    def debug(self, msg):
        if self.debug_enabled:
            self._emit("DEBUG", ">>> ", f"{MAGENTA}{DIM}", msg)
    def info(self, msg):  self._emit("INFO", "→ ", CYAN, msg)
    def ok(self, msg):    self._emit("INFO", "✔ ", GREEN, msg)
    def warn(self, msg):  self._emit("WARN", "⚠ ", YELLOW, msg)
    def err(self, msg):   self._emit("ERROR", "✘ ", f"{RED}{BOLD}", msg)

    def banner(self, admin: bool, dry_run: bool):
        ctx = "Administrator" if admin else "User"
        ctx_color = RED if admin else GREEN
        mode = f"  {YELLOW}{BOLD}[dry-run]{RESET}" if dry_run else ""
        if self.color:
            print(f"\n{ORANGE1}{BOLD}Winget Reinstaller{RESET}  {GRAY}— uninstall • clean • reinstall{RESET}{mode}", file=self.stream or sys.stdout)
            print(f"{ctx_color}{BOLD}Context:{RESET} {ctx}\n", file=self.stream or sys.stdout)
        else:
            print(f"\nWinget Reinstaller{' [dry-run]' if dry_run else ''}\nContext: {ctx}\n", file=self.stream or sys.stdout)
