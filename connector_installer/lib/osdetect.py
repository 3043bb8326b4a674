from __future__ import annotations

import logging
import shlex
from dataclasses import dataclass
from pathlib import Path
from typing import Dict

from ..errors import UnsupportedPlatformError

logger = logging.getLogger(__name__)

DEBIAN = "debian"
RHEL = "rhel"


@dataclass(frozen=True)
class Platform:
    family: str
    id: str = ""
    id_like: str = ""
    version_id: str = ""


def read_os_release(path: str = "/etc/os-release") -> Dict[str, str]:
    """Parse an os-release file (shell-style KEY=VALUE, values may be quoted)."""

    data: Dict[str, str] = {}
    for line in Path(path).read_text(encoding="utf-8", errors="ignore").splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, raw = line.split("=", 1)
        try:
            parts = shlex.split(raw)
        except ValueError:
            parts = [raw.strip("\"'")]
        data[key.strip()] = " ".join(parts)
    return data


def detect_platform(path: str = "/etc/os-release") -> Platform:
    try:
        info = read_os_release(path)
    except FileNotFoundError as e:
        raise UnsupportedPlatformError(f"Cannot determine distribution: {path} not found") from e

    os_id = info.get("ID", "").lower()
    id_like = info.get("ID_LIKE", "").lower()
    version_id = info.get("VERSION_ID", "")

    if DEBIAN in f"{id_like}{os_id}":
        family = DEBIAN
    elif RHEL in id_like or os_id == RHEL:
        family = RHEL
    else:
        raise UnsupportedPlatformError(f"Unrecognized distribution type: {id_like or os_id or 'unknown'}")

    logger.info("Detected %s family (ID=%s ID_LIKE=%s VERSION_ID=%s)", family, os_id, id_like, version_id)
    return Platform(family=family, id=os_id, id_like=id_like, version_id=version_id)
