import json, time
from pathlib import Path
from .models import FinalState, PipelineOutcome

class RunReport:
    def __init__(self, dry_run: bool = False, pin_version: bool = False):
        self.started = time.time()
        self.finished = None
        self.dry_run = dry_run
        self.pin_version = pin_version
        self.outcomes: list[PipelineOutcome] = []

    def add(self, outcome: PipelineOutcome):
        self.outcomes.append(outcome)

    def mark_finished(self):
        if not self.finished:
            self.finished = time.time()

    def names_in(self, state: FinalState) -> list[str]:
        return [o.app.name for o in self.outcomes if o.final_state == state]

    def counts(self) -> dict:
        return {s.value: len(self.names_in(s)) for s in FinalState}

    @property
    def any_failed(self) -> bool:
        return any(o.final_state.failed for o in self.outcomes)

    def to_dict(self):
        return {
            "started": self.started,
            "finished": self.finished,
            "dry_run": self.dry_run,
            "pin_version": self.pin_version,
            "counts": self.counts(),
            "outcomes": [o.to_dict() for o in self.outcomes],
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)

    def to_txt(self) -> str:
        lines = []
        lines.append("Winget Reinstaller Report")
        lines.append("")
        lines.append(f"Dry run: {self.dry_run}")
        lines.append(f"Pinned versions: {self.pin_version}")
        def w(label, arr):
            if arr: lines.append(f"{label}: " + ", ".join(arr))
        w("Reinstalled", self.names_in(FinalState.REINSTALLED))
        w("Reinstall failed", self.names_in(FinalState.REINSTALL_FAILED))
        w("Uninstall failed", self.names_in(FinalState.UNINSTALL_FAILED))
        for o in self.outcomes:
            if o.cleanup_error:
                lines.append(f"Cleanup issue ({o.app.name}): {o.cleanup_error}")
        return "\n".join(lines)

    def save(self, fmt: str, path: Path):
        path.parent.mkdir(parents=True, exist_ok=True)
        if fmt == "json":
            path.write_text(self.to_json(), encoding="utf-8")
        else:
            path.write_text(self.to_txt(), encoding="utf-8")
