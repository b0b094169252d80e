import io

from persianpkt.progress import ProgressReporter


def test_progress_bar_counts_and_shows_message():
    stream = io.StringIO()
    reporter = ProgressReporter(file=stream)
    bar = reporter.create_progress_bar(10, "Installing")
    bar.update(4)
    assert bar.n == 4
    assert bar.total == 10
    reporter.close()
    output = stream.getvalue()
    assert "Installing" in output
    assert "4/10" in output


def test_download_bar_uses_bytes():
    stream = io.StringIO()
    reporter = ProgressReporter(file=stream)
    bar = reporter.create_download_progress_bar(2048, "Downloading")
    bar.update(1024)
    assert bar.unit == "B"
    assert bar.n == 1024
    reporter.close()
    assert "Downloading" in stream.getvalue()


def test_spinner_has_no_total():
    stream = io.StringIO()
    with ProgressReporter(file=stream) as reporter:
        spinner = reporter.create_spinner("Resolving")
        assert spinner.total is None
    assert "Resolving" in stream.getvalue()


def test_indefinite_bar_counts_steps():
    stream = io.StringIO()
    with ProgressReporter(file=stream) as reporter:
        bar = reporter.create_indefinite_progress_bar("Scanning")
        bar.update(3)
        assert bar.n == 3
    assert "Scanning" in stream.getvalue()


def test_bars_are_stacked_and_closed():
    stream = io.StringIO()
    reporter = ProgressReporter(file=stream)
    first = reporter.create_progress_bar(5, "one")
    second = reporter.create_spinner("two")
    assert [first.pos, second.pos] == [0, 1] or len(reporter.bars) == 2
    assert len(reporter.bars) == 2
    reporter.close()
    assert reporter.bars == []


def test_disabled_reporter_writes_nothing():
    stream = io.StringIO()
    with ProgressReporter(file=stream, disable=True) as reporter:
        bar = reporter.create_progress_bar(5, "quiet")
        bar.update(5)
    assert stream.getvalue() == ""