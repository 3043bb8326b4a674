from __future__ import annotations

import logging

from ..context import InstallContext
from ..enrollment import EnrollmentFailure, run_enrollment
from ..errors import EnrollmentError
from ..version_gate import use_authorize_command

logger = logging.getLogger(__name__)


class EnrollConnectorStep:
    step_id = "60_enroll_connector"

    def run(self, ctx: InstallContext) -> None:
        logger.info("Configure CloudGen Access Connector")

        if ctx.connector_version is not None:
            ctx.use_authorize = use_authorize_command(
                ctx.connector_version, ctx.settings.authorize_min_version
            )
            if not ctx.use_authorize:
                logger.info("Connector %s predates 'authorize', using legacy dry run", ctx.connector_version)

        outcome = run_enrollment(
            ctx.config,
            ctx.use_authorize is not False,
            binary=ctx.settings.binary,
        )
        ctx.outcome = outcome

        if isinstance(outcome, EnrollmentFailure):
            raise EnrollmentError(outcome.reason.remediation, reason=outcome.reason)
