import pytest

from installer.components.php.php_installer import PhpRuntimeComponent


@pytest.fixture
def php_step(app_settings, mock_logger):
    return PhpRuntimeComponent(app_settings, mock_logger)


def test_acceptable_php_is_skipped(mocker, php_step):
    mocker.patch(
        "installer.components.php.php_installer.command_exists", return_value=True
    )
    mocker.patch(
        "installer.components.php.php_installer.get_tool_version",
        return_value="8.2.7",
    )

    result = php_step.run()

    assert result.status == "skipped"
    assert result.message == "We'll rely on your built-in PHP for now."
    assert result.ok is True


def test_minimum_version_itself_is_acceptable(mocker, php_step):
    mocker.patch(
        "installer.components.php.php_installer.command_exists", return_value=True
    )
    mocker.patch(
        "installer.components.php.php_installer.get_tool_version",
        return_value="7.0.0",
    )

    assert php_step.run().status == "skipped"


def test_missing_php_is_fatal(mocker, php_step, mock_logger):
    mocker.patch(
        "installer.components.php.php_installer.command_exists", return_value=False
    )
    version_mock = mocker.patch(
        "installer.components.php.php_installer.get_tool_version"
    )

    result = php_step.run()

    assert result.status == "failed"
    assert result.exit_code == 1
    assert "only programmed for built-in PHP" in result.message
    version_mock.assert_not_called()
    mock_logger.error.assert_called_once()


def test_old_php_reports_required_and_detected(mocker, php_step):
    mocker.patch(
        "installer.components.php.php_installer.command_exists", return_value=True
    )
    mocker.patch(
        "installer.components.php.php_installer.get_tool_version",
        return_value="5.6.40",
    )

    result = php_step.run()

    assert result.status == "failed"
    assert result.exit_code == 1
    assert result.message == (
        "Sorry, your built-in PHP is too old. We require 7.0.0 and yours is 5.6.40"
    )


def test_unreadable_version_is_fatal(mocker, php_step):
    mocker.patch(
        "installer.components.php.php_installer.command_exists", return_value=True
    )
    mocker.patch(
        "installer.components.php.php_installer.get_tool_version",
        return_value=None,
    )

    result = php_step.run()

    assert result.status == "failed"
    assert "yours is unknown" in result.message


def test_minimum_version_comes_from_settings(mocker, app_settings, mock_logger):
    app_settings.php.minimum_version = "8.1.0"
    mocker.patch(
        "installer.components.php.php_installer.command_exists", return_value=True
    )
    mocker.patch(
        "installer.components.php.php_installer.get_tool_version",
        return_value="8.0.30",
    )

    result = PhpRuntimeComponent(app_settings, mock_logger).run()

    assert result.status == "failed"
    assert "We require 8.1.0" in result.message
