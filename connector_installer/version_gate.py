from __future__ import annotations

import re
from typing import List

AUTHORIZE_MIN_VERSION = "1.3.20"

# Development builds report this version and always support `authorize`.
DEV_BUILD_VERSION = "0.0.1"

_LEADING_DIGITS = re.compile(r"\d*")


def _component(part: str) -> int:
    digits = _LEADING_DIGITS.match(part.strip()).group(0)
    return int(digits) if digits else 0


def _components(version: str) -> List[int]:
    version = version.strip()
    if not version:
        return []
    return [_component(p) for p in version.split(".")]


def use_authorize_command(installed_version: str, threshold: str = AUTHORIZE_MIN_VERSION) -> bool:
    """Return True if the installed connector understands the ``authorize`` verb.

    Components are compared left to right as integers. Threshold components
    beyond the end of ``threshold`` count as 0; once the installed version runs
    out of components with everything equal so far the two are treated as equal
    (greater-or-equal wins).
    """
    if installed_version.strip() == DEV_BUILD_VERSION:
        return True

    candidate = _components(installed_version)
    reference = _components(threshold)

    for i, x in enumerate(candidate):
        y = reference[i] if i < len(reference) else 0
        if x > y:
            return True
        if x < y:
            return False
    return True


def authorize_args(use_authorize: bool) -> List[str]:
    if use_authorize:
        return ["authorize"]
    return ["--dry-run", "--run-once"]
