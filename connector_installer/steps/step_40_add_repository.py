from __future__ import annotations

from ..context import InstallContext
from ..lib.pkg import add_repository


class AddRepositoryStep:
    step_id = "40_add_repository"

    def run(self, ctx: InstallContext) -> None:
        add_repository(
            ctx.platform,
            repo_url=ctx.settings.repo_url,
            apt_list_path=ctx.settings.apt_list_path,
        )
