from __future__ import annotations

import contextlib
import enum
import logging
import os
import re
import signal
import subprocess
import sys
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import IO, Iterator, Optional, Sequence, Tuple, Union

from .config import ENV_PREFIX, InstallConfig
from .errors import ArgumentError
from .lib.command import CommandNotFoundError, fmt_argv
from .token_format import redact_token
from .version_gate import authorize_args

logger = logging.getLogger(__name__)

AZURE_TOKEN_KEY = ENV_PREFIX + "AZURE_AUTH_TOKEN"
GOOGLE_TOKEN_KEY = ENV_PREFIX + "GOOGLE_AUTH_TOKEN"
OKTA_TOKEN_KEY = ENV_PREFIX + "OKTA_AUTH_TOKEN"
OKTA_DOMAIN_KEY = ENV_PREFIX + "OKTA_DOMAINNAME"

_SUCCESS_MARKER = "Authorization was successful"
_AZURE_RE = re.compile(r"Your Azure Authentication token is:(.+)")
_GOOGLE_RE = re.compile(r"Your Google Suite token is:(.+)")
_LDAP_MISSING_RE = re.compile(r"ldap_.* not set")
_INVALID_TOKEN_RE = re.compile(r"APIFailException.*422")
_OKTA_MANDATORY = "okta-auth-token and okta-domainname variables are both mandatory"

_CLEANUP_SIGNALS = (signal.SIGTERM, signal.SIGHUP)


class FailureReason(enum.Enum):
    UNRECOGNIZED_SUCCESS = "Something failed. Check the log above."
    MISSING_LDAP_PARAMS = (
        "Missing parameters for ldap directory. Check the documentation for required ldap "
        "arguments and specify as extra connector parameters."
    )
    INVALID_AUTH_TOKEN = "Invalid auth token. Confirm and run the script again."
    MISSING_OKTA_PARAMS = _OKTA_MANDATORY
    UNRECOGNIZED_FAILURE = "Something failed. Ensure the parameters are correct and run the script again."

    @property
    def remediation(self) -> str:
        return self.value


@dataclass(frozen=True)
class EnrollmentSuccess:
    auth_env: Optional[Tuple[str, str]] = None


@dataclass(frozen=True)
class EnrollmentFailure:
    reason: FailureReason


EnrollmentOutcome = Union[EnrollmentSuccess, EnrollmentFailure]


def classify(output: str, exited_ok: bool) -> EnrollmentOutcome:
    """Map the connector's captured output and exit status to an outcome.

    Rules are checked in priority order; the first one that matches wins.
    """

    if exited_ok:
        if _SUCCESS_MARKER in output:
            return EnrollmentSuccess()
        m = _AZURE_RE.search(output)
        if m:
            return EnrollmentSuccess(auth_env=(AZURE_TOKEN_KEY, m.group(1).strip()))
        m = _GOOGLE_RE.search(output)
        if m:
            return EnrollmentSuccess(auth_env=(GOOGLE_TOKEN_KEY, m.group(1).strip()))
        return EnrollmentFailure(FailureReason.UNRECOGNIZED_SUCCESS)

    if _LDAP_MISSING_RE.search(output):
        return EnrollmentFailure(FailureReason.MISSING_LDAP_PARAMS)
    if _INVALID_TOKEN_RE.search(output):
        return EnrollmentFailure(FailureReason.INVALID_AUTH_TOKEN)
    if _OKTA_MANDATORY in output:
        return EnrollmentFailure(FailureReason.MISSING_OKTA_PARAMS)
    return EnrollmentFailure(FailureReason.UNRECOGNIZED_FAILURE)


def has_directory_credentials(config: InstallConfig) -> bool:
    """True when the extras already configure a directory (auth token or LDAP)."""
    return any("AUTH_TOKEN" in k or k.startswith(ENV_PREFIX + "LDAP_") for k in config.extra_keys())


def check_mandatory_pairs(config: InstallConfig) -> Optional[EnrollmentFailure]:
    keys = set(config.extra_keys())
    if OKTA_TOKEN_KEY in keys and OKTA_DOMAIN_KEY not in keys:
        return EnrollmentFailure(FailureReason.MISSING_OKTA_PARAMS)
    return None


def _raise_on_signal(signum, frame):
    raise SystemExit(128 + signum)


@contextlib.contextmanager
def capture_file(tmp_dir: Optional[str] = None) -> Iterator[Path]:
    """Yield a private temp file that is removed however the block is left.

    SIGTERM/SIGHUP are turned into SystemExit while the file exists so the
    removal also runs when the installer is killed.
    """

    fd, name = tempfile.mkstemp(prefix="fyde-connector.", dir=tmp_dir)
    os.close(fd)
    path = Path(name)

    previous = {}
    for sig in _CLEANUP_SIGNALS:
        try:
            previous[sig] = signal.signal(sig, _raise_on_signal)
        except ValueError:
            # not in the main thread
            pass

    try:
        yield path
    finally:
        for sig, handler in previous.items():
            signal.signal(sig, handler)
        logger.info("Clearing temporary file %s", path)
        path.unlink(missing_ok=True)


def _tee(argv: Sequence[str], capture: Path, echo: IO[str]) -> int:
    with capture.open("w", encoding="utf-8") as fh:
        try:
            proc = subprocess.Popen(
                list(argv),
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                errors="replace",
            )
        except OSError as e:
            raise CommandNotFoundError(argv, e) from e
        try:
            for line in proc.stdout:
                echo.write(line)
                echo.flush()
                fh.write(line)
            return proc.wait()
        finally:
            if proc.poll() is None:
                proc.kill()
                proc.wait()


def run_enrollment(
    config: InstallConfig,
    use_authorize: bool,
    *,
    binary: str,
    tmp_dir: Optional[str] = None,
    echo: Optional[IO[str]] = None,
) -> Optional[EnrollmentOutcome]:
    """Authorize the connector against the directory service.

    Returns None when nothing had to be run: unattended installs, and installs
    whose extra parameters already carry directory credentials (those only get
    the mandatory-pair check). The subprocess is never retried.
    """

    if config.unattended:
        logger.info("Unattended install, skipping connector authorization")
        return None

    if has_directory_credentials(config):
        logger.info("Directory credentials provided as extra parameters, skipping connector authorization")
        return check_mandatory_pairs(config)

    if not config.enrollment_token:
        raise ArgumentError("Connector enrollment token is required to authorize the connector")

    argv = [binary, f"--enrollment-token={config.enrollment_token}", *authorize_args(use_authorize)]
    logger.info("CMD %s", redact_token(fmt_argv(argv)))

    with capture_file(tmp_dir) as capture:
        try:
            returncode = _tee(argv, capture, echo or sys.stdout)
        except CommandNotFoundError as e:
            logger.error("%s", e)
            return EnrollmentFailure(FailureReason.UNRECOGNIZED_FAILURE)
        output = capture.read_text(encoding="utf-8", errors="replace")

    outcome = classify(output, returncode == 0)
    logger.debug("Connector exited with %s, outcome %s", returncode, outcome)
    return outcome
