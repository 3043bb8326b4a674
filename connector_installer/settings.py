from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from .errors import ArgumentError

DEFAULT_REPO_URL = "downloads.access.barracuda.com"
DEFAULT_SERVICE = "fyde-connector"
DEFAULT_LOG_PATH = "/var/log/fyde-connector-installer.log"


@dataclass(frozen=True)
class InstallerSettings:
    """Site/packaging settings; every key is optional and falls back to a default."""

    raw: Dict[str, Any] = field(default_factory=dict)

    @property
    def repo_url(self) -> str:
        return str(self.raw.get("repo_url") or DEFAULT_REPO_URL)

    @property
    def package(self) -> str:
        return str(self.raw.get("package") or "fyde-connector")

    @property
    def service(self) -> str:
        return str(self.raw.get("service") or DEFAULT_SERVICE)

    @property
    def binary(self) -> str:
        return str(self.raw.get("binary") or "/usr/bin/fyde-connector")

    @property
    def override_path(self) -> str:
        return str(
            self.raw.get("override_path")
            or f"/etc/systemd/system/{self.service}.service.d/10-environment.conf"
        )

    @property
    def apt_list_path(self) -> str:
        return str(self.raw.get("apt_list_path") or "/etc/apt/sources.list.d/fyde.list")

    @property
    def os_release(self) -> str:
        return str(self.raw.get("os_release") or "/etc/os-release")

    @property
    def lock_attempts(self) -> int:
        return int(((self.raw.get("lock") or {}).get("attempts")) or 300)

    @property
    def lock_interval(self) -> float:
        return float(((self.raw.get("lock") or {}).get("interval")) or 1.0)

    @property
    def log_path(self) -> str:
        return str(self.raw.get("log_path") or DEFAULT_LOG_PATH)

    @property
    def authorize_min_version(self) -> str:
        return str(self.raw.get("authorize_min_version") or "1.3.20")


def load_settings(path: Optional[str]) -> InstallerSettings:
    if not path:
        return InstallerSettings()

    p = Path(path)
    if not p.exists():
        raise ArgumentError(f"Settings file not found: {path}")

    if p.suffix.lower() not in {".yaml", ".yml"}:
        raise ArgumentError("Settings file must be YAML")

    try:
        import yaml  # type: ignore
    except Exception as e:
        raise RuntimeError("PyYAML is required to read the settings file") from e

    raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    if not isinstance(raw, dict):
        raise ArgumentError("Settings file must contain a mapping/object")

    return InstallerSettings(raw=raw)
