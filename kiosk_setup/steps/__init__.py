from .step_10_update_packages import UpdatePackagesStep
from .step_20_upgrade_packages import UpgradePackagesStep
from .step_30_install_compositor import InstallCompositorStep
from .step_40_install_browser import InstallBrowserStep
from .step_50_configure_resolution import ConfigureResolutionStep
from .step_55_install_hide_cursor import InstallHideCursorStep
from .step_60_configure_greetd import ConfigureGreetdStep
from .step_70_install_splash import InstallSplashStep
from .step_80_create_autostart import CreateAutostartStep
from .step_90_cleanup import CleanupStep

__all__ = [
    "UpdatePackagesStep",
    "UpgradePackagesStep",
    "InstallCompositorStep",
    "InstallBrowserStep",
    "ConfigureResolutionStep",
    "InstallHideCursorStep",
    "ConfigureGreetdStep",
    "InstallSplashStep",
    "CreateAutostartStep",
    "CleanupStep",
]
