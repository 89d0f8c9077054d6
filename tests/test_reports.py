"""
Tests for the run report.
"""

import json

from winget_reinstaller.domain.models import FinalState, PipelineOutcome
from winget_reinstaller.domain.reports import RunReport

from conftest import make_app


def outcomes():
    ok = PipelineOutcome(make_app("7-Zip", "7zip.7zip"), uninstall_code=0, cleanup_attempted=True,
                         reinstall_code=0, final_state=FinalState.REINSTALLED)
    bad = PipelineOutcome(make_app("Git", "Git.Git"), uninstall_code=1, final_state=FinalState.UNINSTALL_FAILED)
    messy = PipelineOutcome(make_app("Zoom", "Zoom.Zoom"), uninstall_code=0, cleanup_attempted=True,
                            cleanup_error="1 item(s) could not be removed", reinstall_code=5,
                            final_state=FinalState.REINSTALL_FAILED)
    return [ok, bad, messy]


class TestRunReport:
    def test_counts_and_failure_flag(self):
        report = RunReport(dry_run=False, pin_version=True)
        for o in outcomes():
            report.add(o)
        counts = report.counts()
        assert counts["Reinstalled"] == 1
        assert counts["UninstallFailed"] == 1
        assert counts["ReinstallFailed"] == 1
        assert counts["Pending"] == 0
        assert report.any_failed

    def test_no_failures(self):
        report = RunReport()
        report.add(outcomes()[0])
        assert not report.any_failed

    def test_save_json(self, tmp_path):
        report = RunReport(dry_run=True)
        for o in outcomes():
            report.add(o)
        report.mark_finished()
        path = tmp_path / "out" / "run.json"
        report.save("json", path)
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["dry_run"] is True
        assert data["finished"] >= data["started"]
        assert [o["final_state"] for o in data["outcomes"]] == ["Reinstalled", "UninstallFailed", "ReinstallFailed"]
        assert data["outcomes"][1]["reinstall_code"] is None

    def test_save_txt(self, tmp_path):
        report = RunReport()
        for o in outcomes():
            report.add(o)
        path = tmp_path / "run.txt"
        report.save("txt", path)
        text = path.read_text(encoding="utf-8")
        assert "Reinstalled: 7-Zip" in text
        assert "Uninstall failed: Git" in text
        assert "Reinstall failed: Zoom" in text
        assert "Cleanup issue (Zoom)" in text
