from __future__ import annotations

import logging

from ..context import InstallContext
from ..lib.ntp import configure_time_sync

logger = logging.getLogger(__name__)


class ConfigureTimeSyncStep:
    step_id = "30_configure_time_sync"

    def run(self, ctx: InstallContext) -> None:
        if ctx.config.skip_ntp:
            logger.info("Skipping NTP configuration")
            return
        configure_time_sync(ctx.platform)
