import json
from pathlib import Path
from ..data.paths import CONFIG_DIR

DEFAULTS = {
    "include_store": False,
    "pin_version": False,
    "picker": "tui",
    "report": "json",
    "out": None,
    "winget": "winget",
    "timeout_sec": 0,
    "store_source": "msstore",
    "yes": False,
}

class ConfigStore:
    def __init__(self, config_dir: Path = CONFIG_DIR):
        self.config_dir = Path(config_dir)
        self.config_path = self.config_dir / "config.json"
        self.settings_path = self.config_dir / "settings.json"
        self.config_dir.mkdir(parents=True, exist_ok=True)
        self.data = self._load_json(self.config_path) or {}
        self.settings = self._load_json(self.settings_path) or {"defaults": dict(DEFAULTS)}

    def _load_json(self, path: Path):
        if path.exists():
            try:
                return json.loads(path.read_text(encoding="utf-8"))
            except (OSError, ValueError):
                return None
        return None

    def _atomic_write(self, path: Path, payload):
        tmp = path.with_suffix(path.suffix + ".tmp")
        tmp.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        tmp.replace(path)

    def save(self):
        self._atomic_write(self.config_path, self.data)

    def save_settings(self):
        self._atomic_write(self.settings_path, self.settings)

    def list_profiles(self):
        return sorted(self.data.get("profiles", {}).keys())

    def get_profile(self, name: str) -> list[str]:
        return list(self.data.get("profiles", {}).get(name, []))

    def set_profile(self, name: str, ids):
        # keep order: profiles feed identifier mode, which preserves request order
        self.data.setdefault("profiles", {})[name] = list(dict.fromkeys(ids))
        self.save()

    def get_defaults(self):
        d = self.settings.get("defaults") or {}
        for k, v in DEFAULTS.items():
            d.setdefault(k, v)
        self.settings["defaults"] = d
        return d

    def set_defaults(self, kv: dict):
        d = self.get_defaults()
        d.update(kv or {})
        self.settings["defaults"] = d
        self.save_settings()
