from __future__ import annotations

import http.client
import json
import logging
import urllib.error
import urllib.request
from pathlib import Path
from typing import Any

from diary_dashboard.config import InputConfig, is_remote_source

LOGGER = logging.getLogger(__name__)


class DatasetLoadError(RuntimeError):
    """The dataset could not be fetched or decoded; the session cannot continue."""


def _read_remote(url: str, timeout: float) -> str:
    try:
        with urllib.request.urlopen(url, timeout=timeout) as response:
            status = getattr(response, "status", 200)
            if status < 200 or status >= 300:
                raise DatasetLoadError(f"Failed to load {url}: HTTP {status}")
            return response.read().decode("utf-8-sig")
    except urllib.error.HTTPError as exc:
        raise DatasetLoadError(f"Failed to load {url}: HTTP {exc.code} {exc.reason}") from exc
    except (urllib.error.URLError, http.client.HTTPException, OSError) as exc:
        raise DatasetLoadError(f"Failed to load {url}: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise DatasetLoadError(f"Dataset at {url} is not valid UTF-8: {exc}") from exc


def _read_local(path: Path) -> str:
    try:
        # utf-8-sig tolerates files saved with a byte-order mark.
        return path.read_text(encoding="utf-8-sig")
    except OSError as exc:
        raise DatasetLoadError(f"Failed to read {path}: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise DatasetLoadError(f"Dataset at {path} is not valid UTF-8: {exc}") from exc


def extract_raw_events(payload: Any) -> list[Any]:
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        events = payload.get("events")
        if events is None:
            return []
        if isinstance(events, list):
            return events
        raise DatasetLoadError("Dataset field 'events' must be a list")
    raise DatasetLoadError(
        f"Dataset must be a JSON object with 'events' or a JSON list, got {type(payload).__name__}"
    )


def load_raw_events(config: InputConfig) -> list[Any]:
    """Fetch the dataset document once and return its raw event entries."""
    source = config.source
    if not source:
        raise DatasetLoadError("input.source is not configured")

    if is_remote_source(source):
        text = _read_remote(source, timeout=config.timeout_seconds)
    else:
        text = _read_local(Path(source))

    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise DatasetLoadError(f"Malformed JSON in {source}: {exc}") from exc

    raw_events = extract_raw_events(payload)
    LOGGER.info("Loaded %d raw events from %s", len(raw_events), source)
    return raw_events
