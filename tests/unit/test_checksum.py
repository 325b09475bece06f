import hashlib

from relcal_lib.storage import checksum
from relcal_lib.storage.checksum import EMPTY_ETAG, fingerprint


def test_fingerprint_is_deterministic_and_quoted():
    data = b'{"environments": []}'
    f1 = fingerprint(data)
    f2 = fingerprint(data)
    assert f1 == f2
    assert f1.startswith('"') and f1.endswith('"')
    # 8 bytes rendered as hex
    assert len(f1) == 2 + 16
    assert f1 == '"' + hashlib.sha256(data).hexdigest()[:16] + '"'


def test_fingerprint_differs_for_distinct_content():
    assert fingerprint(b'{"a": 1}') != fingerprint(b'{"a": 2}')


def test_absent_and_empty_buffer_map_to_sentinel():
    assert fingerprint(None) == EMPTY_ETAG
    assert fingerprint(b"") == EMPTY_ETAG
    assert EMPTY_ETAG == '"0"'


def test_empty_json_object_is_not_the_sentinel():
    assert fingerprint(b"{}") != EMPTY_ETAG


def test_write_integrity_sidecar(tmp_path):
    target = tmp_path / "releases.20250415-090000.json"
    target.write_bytes(b'{"staging": []}')
    side = checksum.write_integrity_sidecar(target)
    assert side == tmp_path / "releases.20250415-090000.json.sha256"
    assert side.read_text() == hashlib.sha256(b'{"staging": []}').hexdigest() + "\n"
    assert checksum.verify_integrity_sidecar(target) is True


def test_write_integrity_sidecar_missing_file_is_best_effort(tmp_path, caplog):
    missing = tmp_path / "nope.json"
    assert checksum.write_integrity_sidecar(missing) is None
    assert not (tmp_path / "nope.json.sha256").exists()
    assert "Could not write integrity sidecar" in caplog.text


def test_verify_detects_tampering_and_missing_sidecar(tmp_path):
    target = tmp_path / "holidays.20250101-000000.json"
    target.write_bytes(b'{"holidays": []}')
    assert checksum.verify_integrity_sidecar(target) is None
    checksum.write_integrity_sidecar(target)
    target.write_bytes(b'{"holidays": ["2025-12-25"]}')
    assert checksum.verify_integrity_sidecar(target) is False
