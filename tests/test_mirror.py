from datetime import timedelta

import responses

from persianpkt.mirror import Mirror, MirrorSelector


def _mirror(name, country="IR", seconds=None, available=True):
    return Mirror(
        url=f"https://{name}.example.com/",
        name=name,
        country=country,
        speed=None if seconds is None else timedelta(seconds=seconds),
        is_available=available,
    )


def test_select_fastest():
    mirrors = [_mirror("a", seconds=3), _mirror("b", seconds=1), _mirror("c", seconds=2)]
    assert MirrorSelector().select_fastest_mirror(mirrors).name == "b"


def test_select_ignores_unavailable_unmeasured_and_slow():
    mirrors = [
        _mirror("a", seconds=1, available=False),
        _mirror("b"),
        _mirror("c", seconds=60),
        _mirror("d", seconds=5),
    ]
    assert MirrorSelector().select_fastest_mirror(mirrors).name == "d"
    assert MirrorSelector().select_fastest_mirror(mirrors[:3]) is None
    assert MirrorSelector().select_fastest_mirror([]) is None


def test_mirrors_by_country():
    mirrors = [
        _mirror("a", country="IR"),
        _mirror("b", country="de"),
        _mirror("c", country="ir", available=False),
        _mirror("d", country="Ir"),
    ]
    found = MirrorSelector().mirrors_by_country(mirrors, "iR")
    assert [m.name for m in found] == ["a", "d"]


def test_mirror_status():
    mirrors = [_mirror("a"), _mirror("b", available=False)]
    assert MirrorSelector().mirror_status(mirrors) == {"a": True, "b": False}


def test_check_mirrors():
    ok = _mirror("ok", available=False)
    failing = _mirror("failing")
    down = _mirror("down")
    with responses.RequestsMock() as rsps:
        rsps.add(responses.HEAD, "https://ok.example.com/status", status=200)
        rsps.add(responses.HEAD, "https://failing.example.com/status", status=500)
        MirrorSelector().check_mirrors([ok, failing, down])

    assert ok.is_available is True
    assert ok.speed >= timedelta(0)
    assert ok.last_check is not None and ok.last_check > 0
    assert failing.is_available is False
    assert failing.speed >= timedelta(0)
    assert down.is_available is False
    assert down.speed is None
    assert down.last_check is not None and down.last_check > 0