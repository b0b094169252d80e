from persianpkt.package_info import PackageInfo


def make_info():
    return PackageInfo("curl", "7.88.1", "amd64", "command line tool")


def test_defaults():
    info = make_info()
    assert info.dependencies == []
    assert info.size == 0
    assert info.installed_size == 0
    assert info.homepage is None
    assert info.maintainer == ""
    assert info.sha256 == ""


def test_add_dependency_deduplicates():
    info = make_info()
    info.add_dependency("libc6")
    info.add_dependency("zlib1g")
    info.add_dependency("libc6")
    assert info.dependencies == ["libc6", "zlib1g"]


def test_full_name():
    assert make_info().full_name == "curl_7.88.1"


def test_instances_do_not_share_dependencies():
    first = make_info()
    second = make_info()
    first.add_dependency("libc6")
    assert second.dependencies == []