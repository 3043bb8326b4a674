from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from .config import InstallConfig
from .enrollment import EnrollmentOutcome
from .lib.osdetect import Platform
from .settings import InstallerSettings


@dataclass
class InstallContext:
    """What the steps share: the frozen inputs plus results of earlier steps."""

    config: InstallConfig
    settings: InstallerSettings
    platform: Platform

    connector_version: Optional[str] = None
    use_authorize: Optional[bool] = None
    outcome: Optional[EnrollmentOutcome] = None
    warnings: List[str] = field(default_factory=list)
