# persianpkt

A command-line package manager for Debian-style repositories. It keeps a list
of repositories, checks that their release files and package lists can be
fetched, and records installed packages in a per-user data directory. The
library also offers parsing of `Packages` and `Release` indexes, a package
cache, mirror checks, checksum verification and tar archive helpers.

## Installation

```
pip install .
```

This installs the `pkt` command. Python 3.11 or later is required.

## Usage

Add a repository and check its package lists:

```
pkt repo add https://mirror.example.com/debian/ main-mirror
pkt update
```

Search, inspect and install packages:

```
pkt search test
pkt show test-package
pkt install test-package
pkt install test-package --yes
```

To ask for an exact version, append it to the package name after an `@`
sign, with no spaces, for example `test-package@1.0.0`.

Other commands:

```
pkt list                  # installed packages and their versions
pkt remove NAME [--purge] # delete a package's directory from the packages directory
pkt upgrade               # reinstall packages for which a newer version is found
pkt clean [--all]         # empty the download directory (packages/temp)
pkt repo list             # show repositories, their status and priority
pkt repo enable NAME
pkt repo disable NAME
pkt repo remove NAME
```

`--yes` (`-y`) skips the confirmation prompt of `install`, `remove` and
`upgrade`; an empty answer to the prompt also counts as yes. `--verbose`
prints a notice that verbose mode is on. `--config FILE` is accepted but not
used. `pkt --version` prints the version.

On failure `pkt` prints the error and exits with status 1.

## Files

Configuration lives in the user configuration directory under `persianpkt/`:
`config.toml` holds the settings (architecture, default mirrors, cache size
limit and so on) and is written with defaults on first run;
`repositories.json` holds the repository list. Installed packages are kept in
the user data directory under `persianpkt/packages/<name>/<version>/`, each
with a `package.json` describing it. Downloads go to
`persianpkt/packages/temp/` and are deleted after installation.

## Library use

- `persianpkt.repository`: `Repository` (`create`, `package_list_url`,
  `release_url`, `update`, `search_packages`), `RepositoryManager` and
  `RepositoryError`.
- `persianpkt.source`: `parse_packages_file`, `parse_release_file` and
  `RepositorySource` for fetching indexes and package files.
- `persianpkt.manager`: `PackageManager` (`find_package`, `download_package`,
  `install_package`) and `PackageNotFoundError`.
- `persianpkt.package`, `persianpkt.package_info`, `persianpkt.dependency`:
  `Package`, `PackageInfo`, `PackageDependency` and `matches_requirement` for
  semantic-version requirements such as `^1.2` or `>=1.0, <2.0`.
- `persianpkt.config` and `persianpkt.paths`: `Config` (TOML load and save)
  and `ConfigPaths`.
- `persianpkt.cache`: `CacheSystem`, a directory of `<name>_<version>.pkg`
  files with age-based cleaning.
- `persianpkt.mirror`: `Mirror` and `MirrorSelector` (HEAD-request checks,
  fastest mirror, filtering by country).
- `persianpkt.security`: `calculate_checksum` (SHA-256) and
  `SecurityVerifier` for trusted key ids and checksum checks.
- `persianpkt.compression`: `CompressionFormat`, `compress_data`,
  `decompress_data`, `create_archive` and `extract_archive` for gzip, xz and
  plain tar.
- `persianpkt.fsutils`: directory copying, sizing and file search helpers.
- `persianpkt.progress`: `ProgressReporter`, building tqdm progress bars.

## What it does not do

- `pkt update` only checks that the release file and each package list can be
  fetched; it does not store the lists.
- Searching does not read any package index: `Repository.search_packages`
  knows a single built-in entry, `test-package` 1.0.0, returned for queries
  that contain `test` or are part of it. `show`, `install` and `upgrade` rely
  on the same search.
- Installing downloads from a fixed placeholder address, and records the
  package's `package.json` without unpacking any files or resolving
  dependencies.
- `--purge` only prints a notice; no dependencies are removed.
- Signatures are not checked cryptographically:
  `SecurityVerifier.verify_signature` accepts any bytes-like signature.
- The `pkt` command does not use the mirror selection or the package cache;
  they are available only through the library.