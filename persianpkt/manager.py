"""Finding, downloading and installing packages from repositories."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

import requests
import semver

from persianpkt.package import Package, _now
from persianpkt.progress import ProgressReporter
from persianpkt.repository import Repository, RepositoryError

_CHUNK_SIZE = 64 * 1024


class PackageNotFoundError(LookupError):
    """Raised when no repository offers the requested package."""


class PackageManager:
    """Installs packages from a list of repositories into ``install_dir``."""

    def __init__(
        self,
        install_dir: Path | str,
        repositories: list[Repository],
        session: requests.Session | None = None,
        reporter: ProgressReporter | None = None,
    ) -> None:
        self.install_dir = Path(install_dir)
        self.repositories = list(repositories)
        self.session = session if session is not None else requests.Session()
        self.reporter = reporter if reporter is not None else ProgressReporter()

    def download_package(
        self, package_name: str, version: str | None = None
    ) -> tuple[Path, Package]:
        """Download a package into the temporary directory.

        Returns the path of the downloaded file and the package record.
        """
        package = self.find_package(package_name, version)
        temp_dir = self.install_dir / "temp"
        temp_dir.mkdir(parents=True, exist_ok=True)
        download_path = temp_dir / f"{package.name}_{package.version}.pkg"

        print(f"Downloading {package.name} version {package.version}...")
        url = f"https://example.com/{package.name}/{package.version}"
        try:
            response = self.session.get(url, stream=True)
        except requests.RequestException as exc:
            raise OSError(f"Failed to download package: {exc}") from exc

        with response:
            total = int(response.headers.get("Content-Length", 0) or 0)
            bar = self.reporter.create_download_progress_bar(total or None, package.name)
            try:
                with download_path.open("wb") as handle:
                    for chunk in response.iter_content(chunk_size=_CHUNK_SIZE):
                        handle.write(chunk)
                        bar.update(len(chunk))
            except requests.RequestException as exc:
                raise OSError(f"Error while downloading: {exc}") from exc
            finally:
                bar.set_postfix_str("Download completed")
                bar.close()

        return download_path, package

    def install_package(self, package_name: str, version: str | None = None) -> None:
        """Download a package and record it as installed."""
        package_path, package = self.download_package(package_name, version)
        print(f"Installing {package_name} package...")

        install_path = self.install_dir / package.name / package.version
        install_path.mkdir(parents=True, exist_ok=True)

        installed = replace(
            package,
            dependencies=list(package.dependencies),
            conflicts=list(package.conflicts),
            provides=list(package.provides),
            replaces=list(package.replaces),
            install_path=install_path,
            files=[],
            install_date=_now(),
        )
        installed.save(install_path / "package.json")

        print(f"Package {package.name} v{package.version} has been successfully installed")
        package_path.unlink()

    def find_package(self, package_name: str, version: str | None = None) -> Package:
        """Find a package, the exact ``version`` if given, else the latest one.

        Raises ``PackageNotFoundError`` if no repository offers it.
        """
        for repo in self.repositories:
            try:
                packages = repo.search_packages(package_name)
            except RepositoryError:
                continue
            if not packages:
                continue
            if version is not None:
                for package in packages:
                    if package.name == package_name and package.version == version:
                        return package
                continue
            latest = packages[0]
            for package in packages:
                if package.name == package_name and semver.Version.parse(
                    package.version
                ) > semver.Version.parse(latest.version):
                    latest = package
            return latest
        raise PackageNotFoundError(f"Package {package_name} not found")