import json

import pytest

from go2web.cache.store import CACHE_FORMAT_VERSION, FilePageCache, PageCache
from go2web.errors import CacheLoadError, CacheSaveError


def test_memory_cache_get_put() -> None:
    cache = PageCache()
    assert cache.get("http://x.test/") is None

    cache.put("http://x.test/", "body")

    assert cache.get("http://x.test/") == "body"
    assert "http://x.test/" in cache
    assert len(cache) == 1


def test_memory_cache_save_is_noop_on_disk(tmp_path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    cache = PageCache({"http://x.test/": "body"})
    cache.save()

    assert list(tmp_path.iterdir()) == []
    assert cache.load() == {"http://x.test/": "body"}


def test_put_overwrites_existing_entry() -> None:
    cache = PageCache({"http://x.test/": "old"})
    cache.put("http://x.test/", "new")
    assert cache.entries() == {"http://x.test/": "new"}


@pytest.mark.parametrize(
    "pages",
    [
        {},
        {"http://a.test/": "<h1>plain</h1>"},
        {
            "https://ü.test/päge?q=1": "<p>Привет, мир 你好 🌍</p>",
            "http://b.test/": "line one\nline two\r\n\ttabbed",
        },
    ],
)
def test_save_then_load_roundtrip(tmp_path, pages: dict) -> None:
    path = tmp_path / "data.cache"
    FilePageCache(path).save(pages)

    loaded = FilePageCache(path).load()
    assert loaded == pages


def test_load_missing_file_returns_empty(tmp_path) -> None:
    cache = FilePageCache(tmp_path / "absent.cache")

    assert cache.load() == {}
    assert not cache.path.exists()


def test_load_corrupt_file_returns_empty_and_keeps_file(tmp_path) -> None:
    path = tmp_path / "data.cache"
    path.write_text("{not json", encoding="utf-8")
    cache = FilePageCache(path)

    assert cache.load() == {}
    assert path.read_text(encoding="utf-8") == "{not json"


def test_read_corrupt_file_raises(tmp_path) -> None:
    path = tmp_path / "data.cache"
    path.write_bytes(b"\xac\xed\x00\x05sr\x00\x11java.util.HashMap")

    with pytest.raises(CacheLoadError):
        FilePageCache(path).read()


def test_version_mismatch_is_treated_as_corrupt(tmp_path) -> None:
    path = tmp_path / "data.cache"
    path.write_text(
        json.dumps({"version": CACHE_FORMAT_VERSION + 1, "pages": {"http://a.test/": "x"}}),
        encoding="utf-8",
    )
    cache = FilePageCache(path)

    with pytest.raises(CacheLoadError, match="unsupported cache version"):
        cache.read()
    assert cache.load() == {}


def test_non_string_body_is_rejected(tmp_path) -> None:
    path = tmp_path / "data.cache"
    path.write_text(
        json.dumps({"version": CACHE_FORMAT_VERSION, "pages": {"http://a.test/": 42}}),
        encoding="utf-8",
    )

    with pytest.raises(CacheLoadError, match="not a string"):
        FilePageCache(path).read()


def test_save_writes_full_mapping_atomically(tmp_path) -> None:
    path = tmp_path / "nested" / "data.cache"
    cache = FilePageCache(path)
    cache.load()
    cache.put("http://a.test/", "A")
    cache.put("http://b.test/", "B")

    cache.save()

    payload = json.loads(path.read_text(encoding="utf-8"))
    assert payload == {
        "version": CACHE_FORMAT_VERSION,
        "pages": {"http://a.test/": "A", "http://b.test/": "B"},
    }
    assert not path.with_name("data.cache.tmp").exists()


def test_save_failure_raises_cache_save_error(tmp_path) -> None:
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("file", encoding="utf-8")
    cache = FilePageCache(blocker / "data.cache")
    cache.put("http://a.test/", "A")

    with pytest.raises(CacheSaveError):
        cache.save()


def _write_surrogate_cache(path) -> None:
    path.write_text(
        '{"version": 1, "pages": {"http://a.test/": "\\ud800"}}',
        encoding="utf-8",
    )


def test_unencodable_body_in_file_is_treated_as_corrupt(tmp_path) -> None:
    path = tmp_path / "data.cache"
    _write_surrogate_cache(path)
    cache = FilePageCache(path)

    with pytest.raises(CacheLoadError, match="not valid UTF-8"):
        cache.read()
    assert cache.load() == {}

    cache.save()
    assert json.loads(path.read_text(encoding="utf-8"))["pages"] == {}


def test_unencodable_body_save_raises_and_cleans_up(tmp_path) -> None:
    path = tmp_path / "data.cache"
    FilePageCache(path).save({"http://kept.test/": "previous"})
    cache = FilePageCache(path)
    cache.load()
    cache.put("http://a.test/", "\ud800")

    with pytest.raises(CacheSaveError):
        cache.save()

    assert not path.with_name("data.cache.tmp").exists()
    assert json.loads(path.read_text(encoding="utf-8"))["pages"] == {
        "http://kept.test/": "previous"
    }
