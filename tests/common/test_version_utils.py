import pytest

from common.version_utils import (
    extract_version,
    get_tool_version,
    is_version_acceptable,
)


@pytest.mark.parametrize(
    "version, minimum, expected",
    [
        ("7.0.0", "7.0.0", True),
        ("6.9.9", "7.0.0", False),
        ("7.10.0", "7.9.0", True),
        ("8.2.7", "7.0.0", True),
        ("7.4", "7.0.0", True),
        ("5.6.40", "7.0.0", False),
    ],
)
def test_is_version_acceptable_compares_numerically(version, minimum, expected):
    assert is_version_acceptable(version, minimum) is expected


def test_is_version_acceptable_rejects_garbage():
    with pytest.raises(ValueError):
        is_version_acceptable("not-a-version", "7.0.0")


@pytest.mark.parametrize(
    "text, expected",
    [
        ("PHP 8.2.7 (cli) (built: Jun  8 2023 15:27:40) (NTS)", "8.2.7"),
        ("PHP 8.1.2-1ubuntu2.14 (cli) (built: Aug 18 2023)", "8.1.2"),
        ("PHP 7.4 (cli)", "7.4"),
        ("no version here", None),
        ("", None),
        (None, None),
    ],
)
def test_extract_version(text, expected):
    assert extract_version(text) == expected


def test_get_tool_version_reads_first_line(mocker, app_settings, make_completed):
    output = (
        "PHP 8.3.1 (cli) (built: Dec 21 2023 20:12:13) (NTS)\n"
        "Copyright (c) The PHP Group\n"
        "Zend Engine v4.3.1, Copyright (c) Zend Technologies\n"
    )
    run_mock = mocker.patch(
        "common.version_utils.run_command", return_value=make_completed(stdout=output)
    )

    assert get_tool_version("php", app_settings) == "8.3.1"
    assert run_mock.call_args[0][0] == ["php", "-v"]


def test_get_tool_version_missing_tool(mocker, app_settings):
    mocker.patch("common.version_utils.run_command", side_effect=FileNotFoundError)

    assert get_tool_version("php", app_settings) is None


def test_get_tool_version_without_version_output(mocker, app_settings, make_completed):
    mocker.patch(
        "common.version_utils.run_command",
        return_value=make_completed(stdout="segmentation fault"),
    )

    assert get_tool_version("php", app_settings) is None
