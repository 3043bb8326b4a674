from __future__ import annotations

from ..context import InstallContext
from ..lib.pkg import install_prerequisites


class InstallPrerequisitesStep:
    step_id = "20_install_prerequisites"

    def run(self, ctx: InstallContext) -> None:
        install_prerequisites(ctx.platform)
