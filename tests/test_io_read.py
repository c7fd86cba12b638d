from __future__ import annotations

import codecs
import http.client
import json
import urllib.error
from pathlib import Path

import pytest

from diary_dashboard.config import InputConfig
from diary_dashboard.io import read as read_module
from diary_dashboard.io.read import DatasetLoadError, extract_raw_events, load_raw_events


def test_load_raw_events_reads_events_object(tmp_path: Path) -> None:
    path = tmp_path / "data.json"
    path.write_text(
        json.dumps({"events": [{"event_name": "A"}, {"event_name": "B"}]}, ensure_ascii=False),
        encoding="utf-8",
    )

    raw = load_raw_events(InputConfig(source=str(path)))
    assert [item["event_name"] for item in raw] == ["A", "B"]


def test_load_raw_events_accepts_bare_list_with_bom(tmp_path: Path) -> None:
    path = tmp_path / "data.json"
    path.write_bytes(codecs.BOM_UTF8 + json.dumps([{"event_name": "A"}]).encode("utf-8"))

    raw = load_raw_events(InputConfig(source=str(path)))
    assert raw == [{"event_name": "A"}]


def test_load_raw_events_raises_for_missing_file(tmp_path: Path) -> None:
    with pytest.raises(DatasetLoadError, match="Failed to read"):
        load_raw_events(InputConfig(source=str(tmp_path / "missing.json")))


def test_load_raw_events_raises_for_malformed_json(tmp_path: Path) -> None:
    path = tmp_path / "data.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(DatasetLoadError, match="Malformed JSON"):
        load_raw_events(InputConfig(source=str(path)))


def test_load_raw_events_raises_for_undecodable_bytes(tmp_path: Path) -> None:
    path = tmp_path / "data.json"
    path.write_bytes(b'{"events": [\xff]}')

    with pytest.raises(DatasetLoadError, match="not valid UTF-8"):
        load_raw_events(InputConfig(source=str(path)))


def test_extract_raw_events_handles_shapes() -> None:
    assert extract_raw_events({"meta": 1}) == []
    with pytest.raises(DatasetLoadError, match="must be a list"):
        extract_raw_events({"events": {"a": 1}})
    with pytest.raises(DatasetLoadError, match="JSON object"):
        extract_raw_events("events")


class _FakeResponse:
    def __init__(self, body: bytes, status: int = 200) -> None:
        self._body = body
        self.status = status

    def read(self) -> bytes:
        return self._body

    def __enter__(self) -> _FakeResponse:
        return self

    def __exit__(self, *exc_info: object) -> None:
        return None


def test_load_raw_events_fetches_remote_source(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, object] = {}

    def _fake_urlopen(url: str, timeout: float) -> _FakeResponse:
        captured["url"] = url
        captured["timeout"] = timeout
        return _FakeResponse(json.dumps({"events": [{"event_name": "A"}]}).encode("utf-8"))

    monkeypatch.setattr(read_module.urllib.request, "urlopen", _fake_urlopen)

    raw = load_raw_events(InputConfig(source="https://example.org/data.json", timeout_seconds=5))
    assert raw == [{"event_name": "A"}]
    assert captured == {"url": "https://example.org/data.json", "timeout": 5}


def test_load_raw_events_wraps_remote_failures(monkeypatch: pytest.MonkeyPatch) -> None:
    def _failing_urlopen(url: str, timeout: float) -> _FakeResponse:
        raise urllib.error.URLError("connection refused")

    monkeypatch.setattr(read_module.urllib.request, "urlopen", _failing_urlopen)

    with pytest.raises(DatasetLoadError, match="connection refused"):
        load_raw_events(InputConfig(source="http://example.org/data.json"))


def test_load_raw_events_rejects_non_success_status(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        read_module.urllib.request,
        "urlopen",
        lambda url, timeout: _FakeResponse(b"[]", status=304),
    )

    with pytest.raises(DatasetLoadError, match="HTTP 304"):
        load_raw_events(InputConfig(source="http://example.org/data.json"))


def test_load_raw_events_rejects_undecodable_remote_body(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        read_module.urllib.request,
        "urlopen",
        lambda url, timeout: _FakeResponse(b'{"events": [\xff]}'),
    )

    with pytest.raises(DatasetLoadError, match="not valid UTF-8"):
        load_raw_events(InputConfig(source="http://example.org/data.json"))


class _TruncatedResponse(_FakeResponse):
    def read(self) -> bytes:
        raise http.client.IncompleteRead(b'{"events": [', expected=64)


def test_load_raw_events_wraps_truncated_remote_body(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        read_module.urllib.request,
        "urlopen",
        lambda url, timeout: _TruncatedResponse(b""),
    )

    with pytest.raises(DatasetLoadError, match="Failed to load http://example.org/data.json"):
        load_raw_events(InputConfig(source="http://example.org/data.json"))
