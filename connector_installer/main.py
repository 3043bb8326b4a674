from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Callable, List, NoReturn, Optional

from .config import LOG_LEVELS, InstallConfig, parse_extra_var, resolve_config
from .context import InstallContext
from .errors import ArgumentError, InstallerError, PrivilegeError, TokenFormatError
from .lib.osdetect import detect_platform
from .logging_utils import configure_logging
from .pipeline import PipelineResult, run_pipeline
from .settings import InstallerSettings, load_settings
from .steps import (
    AddRepositoryStep,
    ConfigureTimeSyncStep,
    EnrollConnectorStep,
    InstallConnectorStep,
    InstallPrerequisitesStep,
    StartServiceStep,
    WaitPackageLockStep,
    WriteServiceConfigStep,
)
from .token_format import validate_token

logger = logging.getLogger(__name__)

DESCRIPTION = "Install CloudGen Access User Directory Connector"


class _Parser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        raise ArgumentError(message)


def _extra_var(text: str):
    try:
        return parse_extra_var(text)
    except ArgumentError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def _token(text: str) -> str:
    if not validate_token(text):
        raise TokenFormatError("CloudGen Access Connector enrollment token is invalid, please try again")
    return text


def build_parser() -> argparse.ArgumentParser:
    p = _Parser(prog="fyde-connector-installer", description=DESCRIPTION)
    p.add_argument(
        "-e",
        dest="extra",
        action="append",
        type=_extra_var,
        default=[],
        metavar="KEY=VALUE",
        help="Extra connector environment variables (can be used multiple times)",
    )
    p.add_argument(
        "-l",
        dest="log_level",
        choices=LOG_LEVELS,
        default=None,
        metavar="LEVEL",
        help="Loglevel (debug, info, warning, error, critical), defaults to info.",
    )
    p.add_argument("-n", dest="no_start_service", action="store_true", help="Don't start services after install")
    p.add_argument("-t", dest="token", type=_token, default=None, help="Specify CloudGen Access Connector enrollment token")
    p.add_argument("-u", dest="unattended", action="store_true", help="Unattended install, skip requesting input")
    p.add_argument("-z", dest="skip_ntp", action="store_true", help="Skip configuring ntp server")
    p.add_argument("-c", dest="settings", default=None, metavar="FILE", help="YAML installer settings file")
    return p


def build_steps():
    return [
        WaitPackageLockStep(),
        InstallPrerequisitesStep(),
        ConfigureTimeSyncStep(),
        AddRepositoryStep(),
        InstallConnectorStep(),
        EnrollConnectorStep(),
        WriteServiceConfigStep(),
        StartServiceStep(),
    ]


def run(config: InstallConfig, settings: InstallerSettings) -> PipelineResult:
    """Run the install steps for an already resolved configuration."""

    platform = detect_platform(settings.os_release)
    ctx = InstallContext(config=config, settings=settings, platform=platform)
    result = run_pipeline(ctx=ctx, steps=build_steps())
    for warning in result.ctx.warnings:
        logger.warning("Completed with warning: %s", warning)
    logger.info("Complete.")
    return result


def main(
    argv: Optional[List[str]] = None,
    *,
    euid: Optional[int] = None,
    interactive: Optional[bool] = None,
    prompt: Callable[[str], str] = input,
) -> int:
    try:
        args = build_parser().parse_args(argv)
        settings = load_settings(args.settings)
        configure_logging(log_path=settings.log_path)

        if (os.geteuid() if euid is None else euid) != 0:
            raise PrivilegeError("This script needs to be run as root")

        config = resolve_config(
            token=args.token,
            extra=args.extra,
            log_level=args.log_level,
            unattended=args.unattended,
            skip_ntp=args.skip_ntp,
            no_start_service=args.no_start_service,
            interactive=sys.stdin.isatty() if interactive is None else interactive,
            prompt=prompt,
        )
        run(config, settings)
        return 0
    except InstallerError as e:
        # logging may not be configured yet for argument errors
        if logging.getLogger().handlers:
            logger.error("%s", e)
        else:
            print(str(e), file=sys.stderr)
        return e.exit_code
    except (RuntimeError, OSError) as e:
        logger.error("%s", e)
        return 1
    except KeyboardInterrupt:
        logger.error("Installation cancelled by user")
        return 130


if __name__ == "__main__":
    raise SystemExit(main())
