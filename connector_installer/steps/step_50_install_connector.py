from __future__ import annotations

import logging

from ..context import InstallContext
from ..lib import systemd
from ..lib.command import run_cmd
from ..lib.pkg import install_packages

logger = logging.getLogger(__name__)


class InstallConnectorStep:
    step_id = "50_install_connector"

    def run(self, ctx: InstallContext) -> None:
        logger.info("Install CloudGen Access Connector")
        install_packages(ctx.platform, [ctx.settings.package])
        systemd.enable(ctx.settings.service)

        version = run_cmd([ctx.settings.binary, "--version"]).stdout.strip()
        ctx.connector_version = version
        logger.info("Installed version is %s", version)
