import hashlib
import subprocess

import pytest

from common.errors import DownloadError, IntegrityMismatchError, SubprocessFailureError
from common.integrity_utils import fetch_and_verify, run_payload

PAYLOAD = b"<?php // composer installer"
PAYLOAD_URL = "https://getcomposer.org/installer"
SIGNATURE_URL = "https://composer.github.io/installer.sig"


@pytest.fixture
def work_dir(tmp_path):
    """Empty directory the payload is downloaded into."""
    directory = tmp_path / "work"
    directory.mkdir()
    return directory


@pytest.fixture
def fake_download(mocker):
    """Replace the network download with a local write of PAYLOAD."""

    def _download(url, path, timeout=None, current_logger=None):
        path.write_bytes(PAYLOAD)
        return path

    return mocker.patch("common.integrity_utils.download_file", side_effect=_download)


def test_fetch_and_verify_accepts_matching_checksum(
    mocker, work_dir, app_settings, fake_download
):
    mocker.patch(
        "common.integrity_utils.fetch_text",
        return_value=hashlib.sha384(PAYLOAD).hexdigest(),
    )

    payload = fetch_and_verify(
        PAYLOAD_URL, SIGNATURE_URL, "sha384", work_dir, app_settings
    )

    assert payload == work_dir / "installer"
    assert payload.read_bytes() == PAYLOAD


def test_fetch_and_verify_uses_given_filename(
    mocker, work_dir, app_settings, fake_download
):
    mocker.patch(
        "common.integrity_utils.fetch_text",
        return_value=hashlib.sha384(PAYLOAD).hexdigest(),
    )

    payload = fetch_and_verify(
        PAYLOAD_URL,
        SIGNATURE_URL,
        "sha384",
        work_dir,
        app_settings,
        payload_filename="composer-setup.php",
    )

    assert payload.name == "composer-setup.php"


def test_fetch_and_verify_mismatch_deletes_payload_and_never_executes(
    mocker, work_dir, app_settings, fake_download, mock_logger
):
    mocker.patch("common.integrity_utils.fetch_text", return_value="0" * 96)
    run_mock = mocker.patch("common.integrity_utils.run_command")

    with pytest.raises(IntegrityMismatchError) as excinfo:
        fetch_and_verify(
            PAYLOAD_URL,
            SIGNATURE_URL,
            "sha384",
            work_dir,
            app_settings,
            current_logger=mock_logger,
        )

    assert excinfo.value.exit_code == 2
    assert excinfo.value.expected == "0" * 96
    assert excinfo.value.actual == hashlib.sha384(PAYLOAD).hexdigest()
    assert list(work_dir.iterdir()) == []
    run_mock.assert_not_called()
    mock_logger.error.assert_called_once()


def test_fetch_and_verify_signature_unreachable_removes_payload(
    mocker, work_dir, app_settings, fake_download
):
    mocker.patch(
        "common.integrity_utils.fetch_text",
        side_effect=DownloadError("offline", url=SIGNATURE_URL),
    )

    with pytest.raises(DownloadError):
        fetch_and_verify(PAYLOAD_URL, SIGNATURE_URL, "sha384", work_dir, app_settings)

    assert list(work_dir.iterdir()) == []


def test_fetch_and_verify_degrades_when_algorithm_unavailable(
    mocker, work_dir, app_settings, fake_download, mock_logger
):
    fetch_mock = mocker.patch("common.integrity_utils.fetch_text")
    mocker.patch(
        "common.integrity_utils.hash_algorithm_available", return_value=False
    )

    payload = fetch_and_verify(
        PAYLOAD_URL,
        SIGNATURE_URL,
        "sha384",
        work_dir,
        app_settings,
        current_logger=mock_logger,
    )

    assert payload.exists()
    fetch_mock.assert_not_called()
    mock_logger.warning.assert_called_once()
    assert "without verification" in mock_logger.warning.call_args[0][0]


def test_run_payload_returns_exit_status(mocker, work_dir, app_settings, make_completed):
    run_mock = mocker.patch(
        "common.integrity_utils.run_command", return_value=make_completed(returncode=3)
    )
    payload = work_dir / "composer-setup.php"

    assert run_payload(payload, "php", ("--quiet",), cwd=work_dir, app_settings=app_settings) == 3
    assert run_mock.call_args[0][0] == ["php", str(payload), "--quiet"]
    assert run_mock.call_args[1]["check"] is False
    assert run_mock.call_args[1]["cwd"] == str(work_dir)


def test_run_payload_interpreter_missing(mocker, work_dir, app_settings):
    mocker.patch("common.integrity_utils.run_command", side_effect=FileNotFoundError)

    with pytest.raises(SubprocessFailureError) as excinfo:
        run_payload(work_dir / "composer-setup.php", "php", app_settings=app_settings)

    assert excinfo.value.returncode is None


def test_run_payload_subprocess_error(mocker, work_dir, app_settings):
    mocker.patch(
        "common.integrity_utils.run_command",
        side_effect=subprocess.SubprocessError("fork failed"),
    )

    with pytest.raises(SubprocessFailureError):
        run_payload(work_dir / "composer-setup.php", "php", app_settings=app_settings)
