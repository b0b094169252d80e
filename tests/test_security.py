import pytest

from persianpkt.security import SecurityVerifier, calculate_checksum


def test_checksum_known_values():
    assert calculate_checksum(b"") == (
        "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"
    )
    assert calculate_checksum(b"abc") == (
        "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"
    )


def test_verify_checksum_round_trip():
    verifier = SecurityVerifier()
    data = b"package contents"
    digest = calculate_checksum(data)
    assert verifier.verify_checksum(data, digest) is True
    assert verifier.verify_checksum(data + b"x", digest) is False
    assert verifier.verify_checksum(data, digest.upper()) is False


def test_load_trusted_keys(tmp_path):
    keys_file = tmp_path / "keys.txt"
    keys_file.write_text("  KEYA  \n\n   \nKEYB\n")
    verifier = SecurityVerifier(["OLD"])
    verifier.load_trusted_keys(keys_file)
    assert verifier.trusted_keys == ["KEYA", "KEYB"]
    assert verifier.is_key_trusted("OLD") is False


def test_load_missing_keys_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        SecurityVerifier().load_trusted_keys(tmp_path / "absent")


def test_add_and_remove_keys():
    verifier = SecurityVerifier()
    verifier.add_trusted_key("KEYA")
    verifier.add_trusted_key("KEYA")
    assert verifier.trusted_keys == ["KEYA"]
    assert verifier.remove_trusted_key("KEYA") is True
    assert verifier.remove_trusted_key("KEYA") is False
    assert verifier.trusted_keys == []


def test_verify_package_requires_trusted_key():
    verifier = SecurityVerifier()
    assert verifier.verify_package(b"data", b"sig", "KEYA") is False
    verifier.add_trusted_key("KEYA")
    assert verifier.verify_package(b"data", b"sig", "KEYA") is True