from .step_10_wait_package_lock import WaitPackageLockStep
from .step_20_install_prerequisites import InstallPrerequisitesStep
from .step_30_configure_time_sync import ConfigureTimeSyncStep
from .step_40_add_repository import AddRepositoryStep
from .step_50_install_connector import InstallConnectorStep
from .step_60_enroll_connector import EnrollConnectorStep
from .step_70_write_service_config import WriteServiceConfigStep
from .step_80_start_service import StartServiceStep

__all__ = [
    "WaitPackageLockStep",
    "InstallPrerequisitesStep",
    "ConfigureTimeSyncStep",
    "AddRepositoryStep",
    "InstallConnectorStep",
    "EnrollConnectorStep",
    "WriteServiceConfigStep",
    "StartServiceStep",
]
