"""Progress bars and spinners for terminal output."""

from __future__ import annotations

from typing import IO

from tqdm import tqdm

_REFRESH_INTERVAL = 0.1


class ProgressReporter:
    """Creates stacked progress displays that share one output stream."""

    def __init__(self, file: IO[str] | None = None, disable: bool = False) -> None:
        self.file = file
        self.disable = disable
        self.bars: list[tqdm] = []

    def _add(self, **options) -> tqdm:
        bar = tqdm(
            file=self.file,
            disable=self.disable,
            position=len(self.bars),
            mininterval=_REFRESH_INTERVAL,
            leave=True,
            **options,
        )
        self.bars.append(bar)
        return bar

    def create_progress_bar(self, total: int, message: str) -> tqdm:
        """A bar counting ``total`` items."""
        return self._add(
            total=total,
            desc=message,
            ascii=" >=",
            bar_format="{desc} [{bar:40}] {n_fmt}/{total_fmt} ({remaining})",
        )

    def create_spinner(self, message: str) -> tqdm:
        """An open-ended indicator for work of unknown length."""
        return self._add(total=None, desc=message, bar_format="{desc} [{elapsed}]")

    def create_download_progress_bar(self, total: int, message: str) -> tqdm:
        """A bar counting ``total`` bytes, showing transfer rate."""
        return self._add(
            total=total,
            desc=message,
            unit="B",
            unit_scale=True,
            unit_divisor=1024,
            ascii=" >=",
            bar_format="{desc} [{bar:40}] {n_fmt}/{total_fmt} ({rate_fmt}, {remaining})",
        )

    def create_indefinite_progress_bar(self, message: str) -> tqdm:
        """An open-ended indicator that also counts completed steps."""
        return self._add(total=None, desc=message, bar_format="{desc} {n_fmt} [{elapsed}]")

    def close(self) -> None:
        """Close every display created by this reporter."""
        for bar in self.bars:
            bar.close()
        self.bars.clear()

    def __enter__(self) -> ProgressReporter:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()