from __future__ import annotations

import logging

from ..context import InstallContext
from ..lib.pkg import wait_for_package_lock

logger = logging.getLogger(__name__)


class WaitPackageLockStep:
    step_id = "10_wait_package_lock"

    def run(self, ctx: InstallContext) -> None:
        cleared = wait_for_package_lock(
            ctx.platform,
            attempts=ctx.settings.lock_attempts,
            interval=ctx.settings.lock_interval,
        )
        if not cleared:
            ctx.warnings.append("package manager lock was still held when the install started")
