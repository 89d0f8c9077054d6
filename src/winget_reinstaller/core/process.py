# core/process.py
import subprocess, platform
from dataclasses import dataclass
from .console import Console

TIMEOUT_CODE = 124

def _win_creation():
    if platform.system() != "Windows":
        return {}
    si = subprocess.STARTUPINFO()
    si.dwFlags |= subprocess.STARTF_USESHOWWINDOW
    flags = 0x08000000  # CREATE_NO_WINDOW
    return {"startupinfo": si, "creationflags": flags}

def format_command(cmd: list[str]) -> str:
    return subprocess.list2cmdline([str(c) for c in cmd])

@dataclass
class CommandResult:
    code: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.code == 0

class Process:
    """Spawns the external tool with an argument list and waits for it."""

    dry_run = False

    def __init__(self, console: Console, timeout_s: float | None = None):
        self.console = console
        self.timeout_s = timeout_s or None
        self._win_kwargs = _win_creation()

    def run(self, cmd: list[str], log_stdout: bool = True) -> CommandResult:
        """
        Runs cmd (no shell) and returns exit code plus captured output.
        stdout is logged at info level and stderr at warning level whatever the
        exit code; log_stdout=False demotes stdout to debug for bulky listings.
        """
        self.console.info(f"Running: {format_command(cmd)}")
        try:
            r = subprocess.run(
                [str(c) for c in cmd], capture_output=True, text=True,
                encoding="utf-8", errors="replace",
                shell=False, timeout=self.timeout_s, **self._win_kwargs
            )
        except subprocess.TimeoutExpired as e:
            self.console.warn(f"Timed out after {self.timeout_s}s: {format_command(cmd)}")
            return CommandResult(TIMEOUT_CODE, _text(e.stdout), _text(e.stderr))
        except OSError as e:
            self.console.err(f"Could not start {cmd[0]}: {e}")
            return CommandResult(1, "", str(e))
        out, err = r.stdout or "", r.stderr or ""
        log_out = self.console.info if log_stdout else self.console.debug
        for line in _lines(out):
            log_out(line)
        for line in _lines(err):
            self.console.warn(line)
        self.console.debug(f"exit code {r.returncode}")
        return CommandResult(r.returncode, out, err)

class DryRunProcess:
    """Same interface as Process; logs the command and never spawns anything."""

    dry_run = True

    def __init__(self, console: Console):
        self.console = console

    def run(self, cmd: list[str], log_stdout: bool = True) -> CommandResult:
        self.console.info(f"[dry-run] would run: {format_command(cmd)}")
        self.console.info("[dry-run] no action taken")
        return CommandResult(0)

def make_runner(console: Console, dry_run: bool, timeout_s: float | None = None):
    if dry_run:
        return DryRunProcess(console)
    return Process(console, timeout_s=timeout_s)

def _text(data) -> str:
    if data is None:
        return ""
    if isinstance(data, bytes):
        return data.decode("utf-8", errors="replace")
    return data

def _lines(text: str):
    # winget redraws progress bars with carriage returns; keep the last frame
    for raw in (text or "").split("\n"):
        s = raw.rstrip("\r").split("\r")[-1].strip()
        if s:
            yield s
