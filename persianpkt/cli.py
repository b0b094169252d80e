"""Command-line interface of the ``pkt`` package manager."""

from __future__ import annotations

import argparse
import shutil
import sys
from collections.abc import Callable, Sequence
from pathlib import Path

import requests
import semver
from termcolor import colored

from persianpkt.config import Config
from persianpkt.manager import PackageManager, PackageNotFoundError
from persianpkt.package import Package
from persianpkt.paths import ConfigPaths
from persianpkt.repository import Repository, RepositoryError, RepositoryManager

_VERSION = "0.1.0"
_NO_REPOSITORIES = "No repositories configured. Add a repository with 'pkt repo add'"
_OPERATION_ERRORS = (
    PackageNotFoundError,
    RepositoryError,
    requests.RequestException,
    OSError,
    ValueError,
)


def _heading(color: str) -> str:
    return colored("==>", color, attrs=["bold"])


def _ok() -> str:
    return colored("✓", "green", attrs=["bold"])


def _fail() -> str:
    return colored("✗", "red", attrs=["bold"])


def _bold(text: str) -> str:
    return colored(text, attrs=["bold"])


def _err(message: str) -> None:
    print(message, file=sys.stderr)


def _confirm() -> bool:
    """Ask the user to confirm; an empty answer means yes."""
    print("Do you want to continue? [Y/n] ", end="", flush=True)
    try:
        answer = sys.stdin.readline()
    except OSError:
        return False
    answer = answer.strip().lower()
    return answer in ("", "y", "yes")


def _repository_manager(paths: ConfigPaths) -> RepositoryManager:
    manager = RepositoryManager(paths.repositories_file)
    manager.load_repositories()
    return manager


def _configured_repositories(paths: ConfigPaths) -> list[Repository]:
    repositories = _repository_manager(paths).list_repositories()
    if not repositories:
        raise RepositoryError(_NO_REPOSITORIES)
    return repositories


def _split_spec(spec: str) -> tuple[str, str | None]:
    """Split ``name@version`` into its parts."""
    if "@" in spec:
        parts = spec.split("@")
        return parts[0], parts[1]
    return spec, None


def _version_key(version: str) -> tuple[int, semver.Version | str]:
    try:
        return (1, semver.Version.parse(version))
    except ValueError:
        return (0, version)


def _is_newer(candidate: str, current: str) -> bool:
    try:
        return semver.Version.parse(candidate) > semver.Version.parse(current)
    except ValueError:
        return False


def _installed_records(packages_dir: Path) -> dict[str, Package]:
    """The highest installed version of every package that has a metadata record."""
    records: dict[str, Package] = {}
    if not packages_dir.is_dir():
        return records
    for package_dir in sorted(p for p in packages_dir.iterdir() if p.is_dir()):
        for version_dir in sorted(p for p in package_dir.iterdir() if p.is_dir()):
            metadata = version_dir / "package.json"
            if not metadata.is_file():
                continue
            try:
                record = Package.load(metadata)
            except (OSError, ValueError, KeyError, TypeError):
                continue
            known = records.get(record.name)
            if known is None or _version_key(record.version) > _version_key(known.version):
                records[record.name] = record
    return records


def _install(args: argparse.Namespace, paths: ConfigPaths) -> None:
    packages: list[str] = args.packages
    if not packages:
        raise ValueError("No packages specified for installation")
    print(f"{_heading('green')} Installing packages: {', '.join(packages)}")
    if not args.yes and not _confirm():
        print("Operation cancelled")
        return

    Config.load(paths.config_file)
    manager = PackageManager(paths.packages_dir, _configured_repositories(paths))

    for spec in packages:
        print(f"Installing package: {spec}")
        name, version = _split_spec(spec)
        try:
            manager.install_package(name, version)
        except _OPERATION_ERRORS as exc:
            _err(f"{_fail()} Failed to install {name}: {exc}")
        else:
            print(f"{_ok()} Successfully installed {name}")


def _remove(args: argparse.Namespace, paths: ConfigPaths) -> None:
    packages: list[str] = args.packages
    if not packages:
        raise ValueError("No packages specified for removal")
    print(f"{_heading('red')} Removing packages: {', '.join(packages)}")
    if args.purge:
        print("Unused dependencies will also be removed")
    if not args.yes and not _confirm():
        print("Operation cancelled")
        return

    for name in packages:
        target = paths.packages_dir / name
        if name and target.is_dir() and target.parent == paths.packages_dir:
            shutil.rmtree(target)
            print(f"{_ok()} Removed {name}")
        else:
            print(f"{_fail()} Package {name} is not installed")


def _update(args: argparse.Namespace, paths: ConfigPaths) -> None:
    print(f"{_heading('blue')} Updating package lists")
    for repo in _configured_repositories(paths):
        print(f"Updating repository '{repo.name}'...")
        try:
            repo.update()
        except (RepositoryError, requests.RequestException, OSError) as exc:
            _err(f"{_fail()} Failed to update repository '{repo.name}': {exc}")
        else:
            print(f"{_ok()} Repository '{repo.name}' updated successfully")


def _upgrade(args: argparse.Namespace, paths: ConfigPaths) -> None:
    print(f"{_heading('blue')} Upgrading packages")
    if not args.yes and not _confirm():
        print("Operation cancelled")
        return

    installed = _installed_records(paths.packages_dir)
    if not installed:
        print("No packages installed")
        return

    manager = PackageManager(paths.packages_dir, _configured_repositories(paths))
    upgraded = 0
    for name, record in sorted(installed.items()):
        try:
            latest = manager.find_package(name)
        except PackageNotFoundError:
            continue
        if not _is_newer(latest.version, record.version):
            continue
        print(f"Upgrading {name} from v{record.version} to v{latest.version}")
        try:
            manager.install_package(name, latest.version)
        except _OPERATION_ERRORS as exc:
            _err(f"{_fail()} Failed to upgrade {name}: {exc}")
        else:
            upgraded += 1
            print(f"{_ok()} Successfully upgraded {name}")

    if not upgraded:
        print("All packages are up to date")


def _search(args: argparse.Namespace, paths: ConfigPaths) -> None:
    query: str = args.query
    if not query:
        raise ValueError("Search query cannot be empty")
    print(f"{_heading('blue')} Searching for packages matching: {query}")

    found = False
    for repo in _configured_repositories(paths):
        try:
            packages = repo.search_packages(query)
        except RepositoryError as exc:
            _err(f"Error searching in repository {repo.name}: {exc}")
            continue
        if not packages:
            continue
        found = True
        print(f"\nPackages found in repository '{repo.name}':")
        for package in packages:
            print(f"  {_bold(package.name)} (v{package.version}) - {package.description}")

    if not found:
        print(f"No packages found matching '{query}'")


def _show(args: argparse.Namespace, paths: ConfigPaths) -> None:
    name: str = args.package
    if not name:
        raise ValueError("Package name cannot be empty")
    print(f"{_heading('blue')} Package information for: {name}")

    manager = PackageManager(paths.packages_dir, _configured_repositories(paths))
    try:
        pkg = manager.find_package(name)
    except PackageNotFoundError as exc:
        raise PackageNotFoundError(f"Package '{name}' not found: {exc}") from exc

    print(f"Name: {_bold(pkg.name)}")
    print(f"Version: {pkg.version}")
    print(f"Architecture: {pkg.architecture}")
    print(f"Description: {pkg.description}")
    print(f"Maintainer: {pkg.maintainer}")
    if pkg.homepage is not None:
        print(f"Homepage: {pkg.homepage}")
    print(f"Section: {pkg.section}")
    print(f"Priority: {pkg.priority}")
    print(f"Size: {pkg.size} bytes")
    print(f"Installed Size: {pkg.installed_size} bytes")
    if pkg.dependencies:
        print("\nDependencies:")
        for dep in pkg.dependencies:
            print(f"  {dep.name}")
    if pkg.conflicts:
        print("\nConflicts:")
        for conflict in pkg.conflicts:
            print(f"  {conflict}")


def _list(args: argparse.Namespace, paths: ConfigPaths) -> None:
    print(f"{_heading('blue')} Installed packages:")
    packages_dir = paths.packages_dir
    if not packages_dir.exists():
        print("No packages installed")
        return

    found = False
    for package_dir in sorted(p for p in packages_dir.iterdir() if p.is_dir()):
        found = True
        for version_dir in sorted(p for p in package_dir.iterdir() if p.is_dir()):
            print(f"  {_bold(package_dir.name)} (v{version_dir.name})")

    if not found:
        print("No packages installed")


def _clean(args: argparse.Namespace, paths: ConfigPaths) -> None:
    print(f"{_heading('blue')} Cleaning package cache")
    temp_dir = paths.packages_dir / "temp"

    if args.all:
        print("Removing all cached packages...")
        if temp_dir.exists():
            shutil.rmtree(temp_dir)
            temp_dir.mkdir(parents=True, exist_ok=True)
            print(f"{_ok()} All cached packages removed")
        else:
            print("Cache directory does not exist")
        return

    print("Removing temporary packages...")
    if not temp_dir.exists():
        print("Cache directory does not exist")
        return
    count = 0
    for entry in sorted(temp_dir.iterdir()):
        entry.unlink()
        count += 1
    print(f"{_ok()} Removed {count} cached packages")


def _require_name(name: str) -> None:
    if not name:
        raise ValueError("Repository name cannot be empty")


def _repo_add(args: argparse.Namespace, paths: ConfigPaths) -> None:
    name, url = args.name, args.url
    _require_name(name)
    if not url:
        raise ValueError("Repository URL cannot be empty")
    print(f"{_heading('blue')} Adding repository: {name} ({url})")

    manager = _repository_manager(paths)
    repo = Repository.create(name, url)
    try:
        manager.add_repository(repo)
    except RepositoryError as exc:
        raise RepositoryError(f"Error adding repository {name}: {exc}") from exc
    print(f"{_ok()} Repository {name} successfully added")


def _repo_toggle(
    action: Callable[[RepositoryManager, str], bool],
    verb: str,
    past: str,
    color: str,
) -> Callable[[argparse.Namespace, ConfigPaths], None]:
    def handler(args: argparse.Namespace, paths: ConfigPaths) -> None:
        name = args.name
        _require_name(name)
        print(f"{_heading(color)} {verb.capitalize()} repository: {name}")
        manager = _repository_manager(paths)
        try:
            done = action(manager, name)
        except RepositoryError as exc:
            raise RepositoryError(f"Error {verb.lower()} repository {name}: {exc}") from exc
        if done:
            print(f"{_ok()} Repository {name} successfully {past}")
        else:
            print(f"{_fail()} Repository {name} not found")

    return handler


def _repo_list(args: argparse.Namespace, paths: ConfigPaths) -> None:
    print(f"{_heading('blue')} Available repositories:")
    repositories = _repository_manager(paths).list_repositories()
    if not repositories:
        print("No repositories found")
        return
    for repo in repositories:
        status = colored("[Enabled]", "green") if repo.enabled else colored("[Disabled]", "red")
        print(f"{status} {repo.name} ({repo.priority}): {repo.url}")


_REPO_HANDLERS: dict[str, Callable[[argparse.Namespace, ConfigPaths], None]] = {
    "add": _repo_add,
    "remove": _repo_toggle(RepositoryManager.remove_repository, "removing", "removed", "red"),
    "list": _repo_list,
    "enable": _repo_toggle(RepositoryManager.enable_repository, "enabling", "enabled", "green"),
    "disable": _repo_toggle(
        RepositoryManager.disable_repository, "disabling", "disabled", "yellow"
    ),
}


def _repo(args: argparse.Namespace, paths: ConfigPaths) -> None:
    _REPO_HANDLERS[args.repo_command](args, paths)


_HANDLERS: dict[str, Callable[[argparse.Namespace, ConfigPaths], None]] = {
    "install": _install,
    "remove": _remove,
    "update": _update,
    "upgrade": _upgrade,
    "search": _search,
    "show": _show,
    "list": _list,
    "repo": _repo,
    "clean": _clean,
}


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the ``pkt`` command."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--verbose", action="store_true", default=argparse.SUPPRESS,
        help="Enable verbose output",
    )
    common.add_argument(
        "--config", default=argparse.SUPPRESS, metavar="FILE",
        help="Use a specific config file",
    )

    parser = argparse.ArgumentParser(
        prog="pkt",
        description="PersianPKT - A modern package manager for Linux distributions",
        parents=[common],
    )
    parser.set_defaults(verbose=False, config=None)
    parser.add_argument("--version", action="version", version=f"%(prog)s {_VERSION}")
    commands = parser.add_subparsers(dest="command", required=True, metavar="COMMAND")

    install = commands.add_parser("install", parents=[common], help="Install packages")
    install.add_argument("packages", nargs="*", help="Packages to install")
    install.add_argument("-y", "--yes", action="store_true", help="Don't ask for confirmation")

    remove = commands.add_parser("remove", parents=[common], help="Remove packages")
    remove.add_argument("packages", nargs="*", help="Packages to remove")
    remove.add_argument("-y", "--yes", action="store_true", help="Don't ask for confirmation")
    remove.add_argument(
        "--purge", action="store_true", help="Remove dependencies that are no longer needed"
    )

    commands.add_parser("update", parents=[common], help="Update package lists")

    upgrade = commands.add_parser("upgrade", parents=[common], help="Upgrade installed packages")
    upgrade.add_argument("-y", "--yes", action="store_true", help="Don't ask for confirmation")

    search = commands.add_parser("search", parents=[common], help="Search for packages")
    search.add_argument("query", help="Search query")

    show = commands.add_parser("show", parents=[common], help="Show package information")
    show.add_argument("package", help="Package name")

    commands.add_parser("list", parents=[common], help="List installed packages")

    repo = commands.add_parser("repo", parents=[common], help="Manage repositories")
    repo_commands = repo.add_subparsers(dest="repo_command", required=True, metavar="COMMAND")
    repo_add = repo_commands.add_parser("add", parents=[common], help="Add a repository")
    repo_add.add_argument("url", help="Repository URL")
    repo_add.add_argument("name", help="Repository name")
    for name, text in (
        ("remove", "Remove a repository"),
        ("enable", "Enable a repository"),
        ("disable", "Disable a repository"),
    ):
        sub = repo_commands.add_parser(name, parents=[common], help=text)
        sub.add_argument("name", help="Repository name")
    repo_commands.add_parser("list", parents=[common], help="List all repositories")

    clean = commands.add_parser("clean", parents=[common], help="Clean package cache")
    clean.add_argument("-a", "--all", action="store_true", help="Remove all cached packages")

    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    return build_parser().parse_args(argv)


def execute_command(args: argparse.Namespace) -> None:
    """Run the command described by parsed ``args``.

    The directory layout comes from ``args.paths`` when present, else the user's defaults.
    """
    if args.verbose:
        print("Verbose mode enabled")
    paths = getattr(args, "paths", None) or ConfigPaths()
    _HANDLERS[args.command](args, paths)


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point of the ``pkt`` command; returns the exit status."""
    args = parse_args(argv)
    try:
        paths = ConfigPaths()
        paths.ensure_dirs_exist()
        Config.load(paths.config_file)
        args.paths = paths
        execute_command(args)
    except Exception as exc:  # noqa: BLE001 - report any failure to the user
        _err(f"{colored('Error:', 'red', attrs=['bold'])} {exc}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())