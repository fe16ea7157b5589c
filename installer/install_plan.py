"""
The ordered list of steps the bootstrap runs.
"""

import logging
from typing import Dict, List, Optional, Tuple

from installer.base_component import BaseComponent
from installer.components.composer.composer_installer import ComposerComponent
from installer.components.composer.composer_package import ComposerPackageComponent
from installer.components.php.php_installer import PhpRuntimeComponent
from installer.config_models import AppSettings

# package id -> (step name, section title)
KNOWN_PACKAGE_STEPS: Dict[str, Tuple[str, str]] = {
    "laravel/installer": ("laravel_installer", "Install the Laravel Installer"),
    "tightenco/takeout": ("takeout", "Install Takeout"),
}


def build_install_steps(
    app_settings: AppSettings,
    logger: Optional[logging.Logger] = None,
) -> List[BaseComponent]:
    """
    Build the install sequence: PHP check, Composer, then one step per
    global package in the configured order.
    """
    steps: List[BaseComponent] = [
        PhpRuntimeComponent(app_settings, logger),
        ComposerComponent(app_settings, logger),
    ]
    for package_id in app_settings.global_packages:
        name, title = KNOWN_PACKAGE_STEPS.get(package_id, (package_id, f"Install {package_id}"))
        steps.append(
            ComposerPackageComponent(
                package_id, app_settings, logger, name=name, title=title
            )
        )
    return steps
