from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Callable, Sequence

from .command import CommandNotFoundError, run_cmd
from .osdetect import DEBIAN, Platform

logger = logging.getLogger(__name__)

APT_LOCKS = (
    "/var/lib/dpkg/lock",
    "/var/lib/apt/lists/lock",
    "/var/cache/apt/archives/lock",
)
YUM_PID = "/var/run/yum.pid"


def package_lock_held(platform: Platform) -> bool:
    if platform.family == DEBIAN:
        # fuser exits 0 when some process has one of the files open
        try:
            r = run_cmd(["fuser", *APT_LOCKS], check=False)
        except CommandNotFoundError as e:
            logger.warning("%s, assuming the package manager lock is free", e)
            return False
        return r.ok
    return Path(YUM_PID).exists()


def wait_for_package_lock(
    platform: Platform,
    *,
    attempts: int = 300,
    interval: float = 1.0,
    sleep: Callable[[float], None] = time.sleep,
) -> bool:
    """Poll until the package manager lock is free.

    Returns False when the lock was still held after the last attempt; the
    caller carries on regardless.
    """

    logger.info("Check for package manager lock file")
    for i in range(1, attempts + 1):
        if not package_lock_held(platform):
            return True
        logger.info("Lock found. Check %d/%d", i, attempts)
        sleep(interval)

    logger.warning("Package manager lock still held after %d checks, continuing anyway", attempts)
    return False


def install_packages(platform: Platform, packages: Sequence[str]) -> None:
    if not packages:
        return
    if platform.family == DEBIAN:
        run_cmd(["apt-get", "install", "-y", *packages])
    else:
        run_cmd(["yum", "-y", "install", *packages])


def install_prerequisites(platform: Platform) -> None:
    if platform.family == DEBIAN:
        return
    logger.info("Install pre-requisites")
    install_packages(platform, ["yum-utils"])


def add_repository(platform: Platform, *, repo_url: str, apt_list_path: str) -> None:
    logger.info("Add Fyde repository")
    if platform.family == DEBIAN:
        key = run_cmd(["wget", "-q", "-O", "-", f"https://{repo_url}/fyde-public-key.asc"])
        run_cmd(["apt-key", "add", "-"], input_text=key.stdout)

        p = Path(apt_list_path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(f"deb https://{repo_url}/apt stable main\n", encoding="utf-8")
        logger.info("Configured apt repo: %s", p)

        run_cmd(["apt-get", "update"])
    else:
        # The repo metadata is still signed with SHA1.
        run_cmd(
            ["yum-config-manager", "-y", "--add-repo", f"https://{repo_url}/fyde.repo"],
            env={"OPENSSL_ENABLE_SHA1_SIGNATURES": "1"},
        )
