from __future__ import annotations

import logging

from . import systemd
from .command import run_cmd
from .osdetect import RHEL, Platform
from .pkg import install_packages

logger = logging.getLogger(__name__)


def configure_time_sync(platform: Platform) -> None:
    """Enable NTP time synchronisation (chrony on RHEL-like hosts)."""

    if platform.family == RHEL:
        logger.info("Ensure chrony daemon is enabled on system boot and started")
        install_packages(platform, ["chrony"])
        systemd.enable("chronyd")
        systemd.start("chronyd")

    logger.info("Ensure time synchronization is enabled")
    # off/on restarts the sync client
    run_cmd(["timedatectl", "set-ntp", "off"])
    run_cmd(["timedatectl", "set-ntp", "on"])
