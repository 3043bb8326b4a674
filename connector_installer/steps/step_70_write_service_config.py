from __future__ import annotations

from ..context import InstallContext
from ..service_config import build_override_lines, write_override


class WriteServiceConfigStep:
    step_id = "70_write_service_config"

    def run(self, ctx: InstallContext) -> None:
        write_override(ctx.settings.override_path, build_override_lines(ctx.config, ctx.outcome))
