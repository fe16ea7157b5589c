from installer.components.composer.composer_installer import ComposerComponent
from installer.components.composer.composer_package import ComposerPackageComponent
from installer.components.php.php_installer import PhpRuntimeComponent
from installer.install_plan import build_install_steps


def test_default_plan_order(app_settings):
    steps = build_install_steps(app_settings)

    assert [s.name for s in steps] == [
        "php",
        "composer",
        "laravel_installer",
        "takeout",
    ]
    assert [s.title for s in steps] == [
        "Install PHP",
        "Install Composer",
        "Install the Laravel Installer",
        "Install Takeout",
    ]
    assert isinstance(steps[0], PhpRuntimeComponent)
    assert isinstance(steps[1], ComposerComponent)
    assert all(isinstance(s, ComposerPackageComponent) for s in steps[2:])


def test_extra_packages_follow_configured_order(app_settings):
    app_settings.global_packages = ["tightenco/takeout", "acme/tool"]

    steps = build_install_steps(app_settings)

    assert [s.name for s in steps] == ["php", "composer", "takeout", "acme/tool"]
    assert steps[-1].package_id == "acme/tool"


def test_every_step_depends_only_on_earlier_steps(app_settings):
    seen = set()
    for step in build_install_steps(app_settings):
        assert step.get_dependencies() <= seen
        seen.add(step.name)
