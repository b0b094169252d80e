import io

import pytest
import requests
import responses

from persianpkt.manager import PackageManager, PackageNotFoundError
from persianpkt.package import Package
from persianpkt.progress import ProgressReporter
from persianpkt.repository import Repository

DOWNLOAD_URL = "https://example.com/test-package/1.0.0"


def _manager(tmp_path, repositories=None):
    if repositories is None:
        repositories = [Repository.create("main", "https://repo.example.com/debian/")]
    reporter = ProgressReporter(file=io.StringIO())
    return PackageManager(tmp_path / "packages", repositories, reporter=reporter)


def test_find_latest_package(tmp_path):
    package = _manager(tmp_path).find_package("test-package")
    assert package.name == "test-package"
    assert package.version == "1.0.0"


def test_find_specific_version(tmp_path):
    package = _manager(tmp_path).find_package("test-package", "1.0.0")
    assert package.version == "1.0.0"


def test_find_missing_version(tmp_path):
    with pytest.raises(PackageNotFoundError, match="test-package"):
        _manager(tmp_path).find_package("test-package", "2.0.0")


def test_find_unknown_package(tmp_path):
    with pytest.raises(PackageNotFoundError):
        _manager(tmp_path).find_package("vim")


def test_find_without_repositories(tmp_path):
    with pytest.raises(PackageNotFoundError):
        _manager(tmp_path, repositories=[]).find_package("test-package")


def test_disabled_repository_is_skipped(tmp_path):
    repo = Repository.create("main", "https://repo.example.com/debian/")
    repo.disable()
    with pytest.raises(PackageNotFoundError):
        _manager(tmp_path, repositories=[repo]).find_package("test-package")


def test_download_package_writes_body(tmp_path):
    body = b"package archive bytes"
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, DOWNLOAD_URL, body=body)
        path, package = _manager(tmp_path).download_package("test-package")
    assert path == tmp_path / "packages" / "temp" / "test-package_1.0.0.pkg"
    assert path.read_bytes() == body
    assert package.name == "test-package"


def test_install_package_saves_metadata(tmp_path):
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, DOWNLOAD_URL, body=b"data")
        manager = _manager(tmp_path)
        manager.install_package("test-package")
    install_path = tmp_path / "packages" / "test-package" / "1.0.0"
    record = Package.load(install_path / "package.json")
    assert record.name == "test-package"
    assert record.version == "1.0.0"
    assert record.install_path == install_path
    assert record.files == []
    assert record.is_installed()
    assert not (tmp_path / "packages" / "temp" / "test-package_1.0.0.pkg").exists()


def test_download_failure_raises(tmp_path):
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, DOWNLOAD_URL, body=requests.ConnectionError("refused"))
        with pytest.raises(OSError, match="Failed to download package"):
            _manager(tmp_path).download_package("test-package")


def test_install_unknown_package_raises(tmp_path):
    with pytest.raises(PackageNotFoundError):
        _manager(tmp_path).install_package("vim")
    assert not (tmp_path / "packages" / "vim").exists()