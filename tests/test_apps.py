"""
Tests for AppService: tool check, listing call and catalog assembly.
"""

import pytest

from winget_reinstaller.core.errors import EmptyInventoryError, ToolMissingError
from winget_reinstaller.services.apps import LIST_ARGS, AppService
from winget_reinstaller.services.registry import UNINSTALL_PATHS, RegistryReader

from conftest import FakeBackend, FakeRunner


@pytest.fixture
def registry(console):
    backend = FakeBackend({
        UNINSTALL_PATHS[0]: [("k1", {"DisplayName": "7-Zip 22.00 (x64)", "InstallLocation": r"C:\Program Files\7-Zip\\"})],
        UNINSTALL_PATHS[2]: [("k2", {"DisplayName": "Git", "DisplayVersion": "2.41.0.windows.3"})],
    })
    return RegistryReader(console, backend=backend)


class TestAppService:
    def test_missing_winget_is_fatal(self, console, monkeypatch):
        monkeypatch.setattr("winget_reinstaller.services.apps.shutil.which", lambda exe: None)
        with pytest.raises(ToolMissingError):
            AppService(console, FakeRunner()).check_environment()

    def test_winget_found(self, console, monkeypatch):
        monkeypatch.setattr("winget_reinstaller.services.apps.shutil.which", lambda exe: r"C:\winget.exe")
        assert AppService(console, FakeRunner()).check_environment() == r"C:\winget.exe"

    def test_listing_uses_list_command(self, console, listing_text):
        runner = FakeRunner(stdout=listing_text)
        records = AppService(console, runner).list_installed()
        assert runner.calls == [["winget"] + LIST_ARGS]
        assert len(records) == 4

    def test_empty_listing_is_fatal(self, console):
        with pytest.raises(EmptyInventoryError):
            AppService(console, FakeRunner(stdout="")).list_installed()

    def test_load_catalog_joins_registry(self, console, listing_text, registry):
        catalog = AppService(console, FakeRunner(stdout=listing_text), registry).load_catalog()
        by_id = {a.identifier: a for a in catalog}
        assert len(catalog) == 4
        assert by_id["7zip.7zip"].install_location == r"C:\Program Files\7-Zip\\"
        assert by_id["Git.Git"].version == "2.41.0.windows.3"
        assert by_id["Axosoft.GitKraken"].install_location is None
