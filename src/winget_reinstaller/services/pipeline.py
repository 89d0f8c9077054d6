from typing import Callable, List, Optional, Sequence
from ..core.console import Console
from ..core.process import CommandResult
from ..domain.models import AppRecord, FinalState, PipelineOutcome
from .cleanup import CleanupResult

def known_version(version: Optional[str]) -> bool:
    v = (version or "").strip()
    return bool(v) and v.lower() != "unknown"

def uninstall_args(app: AppRecord) -> List[str]:
    args = ["uninstall", "--id", app.identifier, "--accept-source-agreements", "-e", "--silent"]
    if app.source:
        args += ["--source", app.source]
    return args

def install_args(app: AppRecord, pin_version: bool = False) -> List[str]:
    args = ["install", "--id", app.identifier, "--accept-source-agreements",
            "--accept-package-agreements", "-e", "--silent"]
    if app.source:
        args += ["--source", app.source]
    if pin_version and known_version(app.version):
        args += ["--version", app.version]
    return args

class PipelineExecutor:
    """
    uninstall -> cleanup -> reinstall for each app, one app at a time.

    A failed uninstall stops that app only. Cleanup never blocks the
    reinstall. Nothing is retried.
    """
    def __init__(self, console: Console, runner, cleaner, winget: str = "winget",
                 pin_version: bool = False,
                 on_outcome: Optional[Callable[[PipelineOutcome], None]] = None):
        self.console = console
        self.runner = runner
        self.cleaner = cleaner
        self.winget = winget
        self.pin_version = pin_version
        self.on_outcome = on_outcome

    def _run(self, args: List[str]) -> CommandResult:
        return self.runner.run([self.winget] + args)

    def uninstall(self, outcome: PipelineOutcome) -> bool:
        app = outcome.app
        self.console.info(f"Uninstalling {app.label()}")
        res = self._run(uninstall_args(app))
        outcome.uninstall_code = res.code
        if res.code != 0:
            outcome.final_state = FinalState.UNINSTALL_FAILED
            self.console.warn(f"Uninstall failed for {app.label()} (exit {res.code}); skipping cleanup and reinstall.")
            return False
        self.console.ok(f"Uninstalled {app.label()}")
        return True

    def cleanup(self, outcome: PipelineOutcome):
        app = outcome.app
        outcome.cleanup_attempted = True
        try:
            res: CleanupResult = self.cleaner.remove(app.install_location)
        except OSError as e:
            outcome.cleanup_error = str(e)
            self.console.warn(f"Cleanup failed for {app.label()}: {e}")
        else:
            outcome.removed_items = res.removed
            outcome.failed_items = list(res.failed)
            if res.error:
                outcome.cleanup_error = res.error
            elif res.failed:
                outcome.cleanup_error = f"{len(res.failed)} item(s) could not be removed"
            if outcome.cleanup_error:
                self.console.warn(f"Cleanup incomplete for {app.label()}: {outcome.cleanup_error}")
        outcome.final_state = FinalState.CLEANED

    def reinstall(self, outcome: PipelineOutcome):
        app = outcome.app
        pinned = self.pin_version and known_version(app.version)
        what = f"version {app.version}" if pinned else "latest version"
        self.console.info(f"Reinstalling {app.label()} ({what})")
        res = self._run(install_args(app, self.pin_version))
        outcome.reinstall_code = res.code
        if res.code != 0:
            outcome.final_state = FinalState.REINSTALL_FAILED
            hint = " Pinned version may be unavailable." if pinned else ""
            self.console.warn(f"Reinstall failed for {app.label()} (exit {res.code}).{hint}")
            return
        outcome.final_state = FinalState.REINSTALLED
        self.console.ok(f"Reinstalled {app.label()}")

    def run_one(self, app: AppRecord) -> PipelineOutcome:
        outcome = PipelineOutcome(app=app)
        if self.uninstall(outcome):
            self.cleanup(outcome)
            self.reinstall(outcome)
        return outcome

    def run(self, selection: Sequence[AppRecord]) -> List[PipelineOutcome]:
        outcomes: List[PipelineOutcome] = []
        total = len(selection)
        for i, app in enumerate(selection, 1):
            self.console.header(f"[{i}/{total}] {app.name}")
            outcome = self.run_one(app)
            outcomes.append(outcome)
            if self.on_outcome:
                self.on_outcome(outcome)
        return outcomes
