from __future__ import annotations

import logging
import os
import shlex
import subprocess
from dataclasses import dataclass
from typing import Mapping, Sequence

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CmdResult:
    argv: list[str]
    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class CommandNotFoundError(RuntimeError):
    """The executable could not be started (missing, not executable, ...)."""

    def __init__(self, argv: Sequence[str], cause: OSError):
        super().__init__(f"Cannot run {argv[0]}: {cause.strerror or cause}")
        self.argv = list(argv)


def fmt_argv(argv: Sequence[str]) -> str:
    return " ".join(shlex.quote(a) for a in argv)


def _log_output(label: str, text: str) -> None:
    text = (text or "").strip()
    if text:
        logger.debug("%s %s", label, text)


def run_cmd(
    argv: Sequence[str],
    *,
    check: bool = True,
    env: Mapping[str, str] | None = None,
    input_text: str | None = None,
) -> CmdResult:
    """Run a system tool (apt, yum, systemctl, ...) and capture its output.

    ``env`` is layered over the installer's own environment. A tool that
    cannot be started raises CommandNotFoundError whatever ``check`` says;
    with check=True a non-zero exit raises RuntimeError.
    """

    argv_list = list(argv)
    logger.info("CMD %s", fmt_argv(argv_list))

    try:
        p = subprocess.run(
            argv_list,
            input=input_text,
            text=True,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            env={**os.environ, **(env or {})},
        )
    except OSError as e:
        raise CommandNotFoundError(argv_list, e) from e

    result = CmdResult(argv=argv_list, returncode=p.returncode, stdout=p.stdout or "", stderr=p.stderr or "")
    _log_output("STDOUT", result.stdout)
    _log_output("STDERR", result.stderr)

    if check and not result.ok:
        raise RuntimeError(f"Command failed ({result.returncode}): {fmt_argv(argv_list)}\n{result.stderr}")

    return result
