from __future__ import annotations

import logging

from ..context import InstallContext
from ..lib import systemd

logger = logging.getLogger(__name__)


class StartServiceStep:
    step_id = "80_start_service"

    def run(self, ctx: InstallContext) -> None:
        service = ctx.settings.service
        systemd.daemon_reload()

        if ctx.config.no_start_service:
            logger.info("Skip CloudGen Access Connector daemon start")
            systemd.stop(service)
            logger.info("To start service: systemctl start %s", service)
        else:
            logger.info("Ensure CloudGen Access Connector daemon is running with latest config")
            systemd.restart(service)

        logger.info("To check logs: journalctl -u %s -f", service)
