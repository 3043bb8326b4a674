from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from .errors import ArgumentError, TokenFormatError
from .token_format import validate_token

logger = logging.getLogger(__name__)

ENV_PREFIX = "FYDE_"
LOG_LEVELS = ("debug", "info", "warning", "error", "critical")
DEFAULT_LOG_LEVEL = "info"

TOKEN_PROMPT = "Paste the CloudGen Access Connector enrollment token: "
EXTRA_PROMPT = "Extra Connector Parameters (KEY=VALUE) (Enter an empty line to continue): "

EnvPair = Tuple[str, str]


@dataclass(frozen=True)
class InstallConfig:
    enrollment_token: Optional[str] = None
    extra_env: Tuple[EnvPair, ...] = ()
    log_level: str = DEFAULT_LOG_LEVEL
    unattended: bool = False
    skip_ntp: bool = False
    no_start_service: bool = False

    def extra_keys(self) -> List[str]:
        return [k for k, _ in self.extra_env]


def normalize_extra_key(key: str) -> str:
    """``ldap-url`` -> ``FYDE_LDAP_URL``; keys already carrying the prefix keep it once."""
    k = key.strip().upper().replace("-", "_")
    if not k.startswith(ENV_PREFIX):
        k = ENV_PREFIX + k
    return k


def parse_extra_var(text: str) -> EnvPair:
    """Parse ``KEY=VALUE``; only the first ``=`` separates, the value may contain more."""
    key, sep, value = text.partition("=")
    if not sep or not key.strip():
        raise ArgumentError(f"Extra connector parameter must be KEY=VALUE, got {text!r}")
    return normalize_extra_key(key), value


def merge_extra_env(pairs: Iterable[EnvPair]) -> Tuple[EnvPair, ...]:
    merged: Dict[str, str] = {}
    for key, value in pairs:
        merged[key] = value
    return tuple(merged.items())


def _prompt_token(prompt: Callable[[str], str]) -> str:
    logger.info("Please provide required variables")
    while True:
        try:
            token = prompt(TOKEN_PROMPT).strip()
        except EOFError:
            raise ArgumentError("No CloudGen Access Connector enrollment token entered") from None
        if not token:
            logger.error("CloudGen Access Connector enrollment token cannot be empty")
        elif not validate_token(token):
            logger.error("CloudGen Access Connector enrollment token is invalid, please try again")
        else:
            return token


def _prompt_extra(prompt: Callable[[str], str]) -> List[EnvPair]:
    pairs: List[EnvPair] = []
    while True:
        try:
            line = prompt(EXTRA_PROMPT).strip()
        except EOFError:
            # end of input closes the list like an empty line
            return pairs
        if not line:
            return pairs
        try:
            pairs.append(parse_extra_var(line))
        except ArgumentError as e:
            logger.error("%s", e)


def resolve_config(
    *,
    token: Optional[str] = None,
    extra: Sequence[EnvPair] = (),
    log_level: Optional[str] = None,
    unattended: bool = False,
    skip_ntp: bool = False,
    no_start_service: bool = False,
    interactive: bool = False,
    prompt: Callable[[str], str] = input,
) -> InstallConfig:
    """Build the immutable install configuration.

    Prompting only happens when ``interactive`` is set and the run is not
    unattended: a missing token is asked for until a valid one is entered, and
    extra parameters are asked for when none were given on the command line.
    """

    level = (log_level or DEFAULT_LOG_LEVEL).lower()
    if level not in LOG_LEVELS:
        raise ArgumentError(f"Invalid log level {log_level!r}, expected one of {', '.join(LOG_LEVELS)}")

    if token is not None and not validate_token(token):
        raise TokenFormatError("CloudGen Access Connector enrollment token is invalid, please try again")

    pairs = list(extra)

    if unattended or not interactive:
        if not token:
            if not unattended:
                raise ArgumentError(
                    "Connector enrollment token is required (-t) when not running interactively; "
                    "use -u to provide it some other way"
                )
            logger.info("Connector Token not found on command line, make sure you provide it some other way")
    else:
        if not token:
            token = _prompt_token(prompt)
        if not pairs:
            pairs = _prompt_extra(prompt)

    return InstallConfig(
        enrollment_token=token or None,
        extra_env=merge_extra_env(pairs),
        log_level=level,
        unattended=unattended,
        skip_ntp=skip_ntp,
        no_start_service=no_start_service,
    )
