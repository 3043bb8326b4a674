from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List, Optional

from .config import ENV_PREFIX, InstallConfig
from .enrollment import EnrollmentOutcome, EnrollmentSuccess

logger = logging.getLogger(__name__)

LOGLEVEL_KEY = ENV_PREFIX + "LOGLEVEL"
ENROLLMENT_TOKEN_KEY = ENV_PREFIX + "ENROLLMENT_TOKEN"

OVERRIDE_MODE = 0o600


def env_line(key: str, value: str) -> str:
    return f"Environment='{key}={value}'"


def build_override_lines(config: InstallConfig, outcome: Optional[EnrollmentOutcome] = None) -> List[str]:
    """Render the drop-in contents. Depends on nothing but the arguments."""

    lines = ["[Service]", env_line(LOGLEVEL_KEY, config.log_level)]

    if not config.unattended:
        lines.append(env_line(ENROLLMENT_TOKEN_KEY, config.enrollment_token or ""))

    if isinstance(outcome, EnrollmentSuccess) and outcome.auth_env:
        lines.append(env_line(*outcome.auth_env))

    lines.extend(env_line(k, v) for k, v in config.extra_env)
    return lines


def write_override(path: str, lines: List[str]) -> Path:
    """Replace the drop-in file with ``lines``; the file is only readable by root."""

    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)

    # holds the enrollment token: create 0600, chmod covers pre-existing files
    fd = os.open(p, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, OVERRIDE_MODE)
    with os.fdopen(fd, "w", encoding="utf-8") as f:
        f.write("\n".join(lines) + "\n")
    os.chmod(p, OVERRIDE_MODE)

    logger.info("Wrote %d line(s) to %s", len(lines), p)
    return p
