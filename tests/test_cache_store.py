import pytest

from remotefonts.errors import CacheIOError, CacheWriteFailure
from remotefonts.fetch.cache import CacheStore, cache_key
from remotefonts.models import RemoteFontAsset
from remotefonts.util.hashing import sha256_hex

FONT_BYTES = b"\x00\x01\x00\x00fake-truetype-payload"
FONT_SHA = sha256_hex(FONT_BYTES)


def test_cache_key_uses_hash_and_url_extension():
    asset = RemoteFontAsset("https://example.com/fonts/Foo-Bold.ttf", "abc123")
    assert cache_key(asset) == "abc123.ttf"


def test_cache_key_ignores_query_and_fragment():
    asset = RemoteFontAsset("https://cdn.test/a.woff2?v=3#x", "abc")
    assert cache_key(asset) == "abc.woff2"


def test_cache_key_without_extension():
    asset = RemoteFontAsset("https://cdn.test/fonts/download", "abc")
    assert cache_key(asset) == "abc"


def test_cache_key_requires_hash():
    with pytest.raises(ValueError):
        cache_key(RemoteFontAsset("https://cdn.test/a.ttf"))


def test_read_missing_file_is_a_miss(tmp_path):
    store = CacheStore()
    assert store.read(tmp_path, "nothing.ttf") is None
    assert store.read(tmp_path / "not-created", "nothing.ttf") is None


def test_read_other_io_errors_propagate(tmp_path):
    (tmp_path / "dir.ttf").mkdir()
    with pytest.raises(CacheIOError):
        CacheStore().read(tmp_path, "dir.ttf")


def test_write_then_read_verified(tmp_path):
    store = CacheStore()
    key = f"{FONT_SHA}.ttf"
    path = store.write(tmp_path / "nested", key, FONT_BYTES)
    assert path == tmp_path / "nested" / key
    assert store.read_verified(tmp_path / "nested", key, FONT_SHA) == FONT_BYTES


def test_read_verified_rejects_corrupted_entry(tmp_path):
    store = CacheStore()
    key = f"{FONT_SHA}.ttf"
    (tmp_path / key).write_bytes(b"tampered")
    assert store.read_verified(tmp_path, key, FONT_SHA) is None
    # the stale file is left in place
    assert (tmp_path / key).read_bytes() == b"tampered"


def test_write_overwrites_existing_entry(tmp_path):
    store = CacheStore()
    (tmp_path / "k.ttf").write_bytes(b"old")
    store.write(tmp_path, "k.ttf", b"new")
    assert (tmp_path / "k.ttf").read_bytes() == b"new"


def test_write_failure_is_typed(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_bytes(b"")
    with pytest.raises(CacheWriteFailure):
        CacheStore().write(blocker / "cache", "k.ttf", b"data")
