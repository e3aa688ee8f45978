"""JSON data store with freshness-aware caching.

Files live under two tiers:
  - live/: Short-lived upstream data (forecast, current conditions, last
    known coordinates), 30-minute TTL
  - derived/: Computed outputs, always recomputed (HTML site)

Every file is wrapped in a metadata envelope with ``valid_until`` so the
fetch flow and the preview cache can skip sources that are still fresh.
The clock is injectable so expiry can be tested without sleeping.
"""

from __future__ import annotations

import json
from datetime import UTC, datetime
from pathlib import Path  # noqa: TC003
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable


def utc_now() -> datetime:
    """Default clock: timezone-aware current UTC time."""
    return datetime.now(UTC)


class DataStore:
    """Manages read/write of cached JSON files with TTL."""

    def __init__(self, base_dir: Path, clock: Callable[[], datetime] = utc_now) -> None:
        self.base = base_dir
        self.live = base_dir / "live"
        self.derived = base_dir / "derived"
        self.clock = clock

    def read(self, path: Path) -> Any:
        """Read the data payload from a metadata-enveloped JSON file.

        Returns the ``data`` field, or None if the file doesn't exist.
        """
        envelope = self.read_raw(path)
        if envelope is None:
            return None
        return envelope.get("data", envelope)

    def read_raw(self, path: Path) -> dict[str, Any] | None:
        """Read the full envelope (meta + data) from a JSON file."""
        full = self._resolve(path)
        if not full.exists():
            return None
        with full.open() as f:
            result: dict[str, Any] = json.load(f)
        return result

    def write(
        self,
        path: Path,
        data: Any,
        source: str,
        valid_until: datetime | None = None,
        **params: Any,
    ) -> Path:
        """Write data wrapped in a metadata envelope.

        Args:
            path: Relative path under base_dir (e.g. ``live/forecast.json``).
            data: Payload to store under the ``data`` key.
            source: Data source identifier (e.g. ``"openweathermap.org"``).
            valid_until: Expiry timestamp. None means derived/no-cache.
            **params: Extra metadata fields (location, query params, etc.).

        Returns:
            Absolute path of the written file.
        """
        full = self._resolve(path)
        full.parent.mkdir(parents=True, exist_ok=True)

        meta: dict[str, Any] = {
            "source": source,
            "fetched_at": self.clock().isoformat(),
        }
        if valid_until is not None:
            meta["valid_until"] = valid_until.isoformat()
        if params:
            meta.update(params)

        envelope = {"meta": meta, "data": data}
        with full.open("w") as f:
            json.dump(envelope, f, indent=2)

        return full

    def delete(self, path: Path) -> bool:
        """Remove a stored file. Returns True if something was deleted."""
        full = self._resolve(path)
        if not full.exists():
            return False
        full.unlink()
        return True

    def _resolve(self, path: Path) -> Path:
        full = self.base / path if not path.is_absolute() else path
        try:
            full.resolve().relative_to(self.base.resolve())
        except ValueError:
            msg = f"Path escapes store base directory: {path}"
            raise ValueError(msg) from None
        return full

    def is_fresh(self, path: Path) -> bool:
        """Check if a file exists and hasn't expired.

        Returns False if the file is missing, has no ``valid_until``, or
        the expiry time has passed.
        """
        envelope = self.read_raw(path)
        if envelope is None:
            return False

        valid_until = envelope.get("meta", {}).get("valid_until")
        if valid_until is None:
            return False

        expiry = datetime.fromisoformat(valid_until)
        if expiry.tzinfo is None:
            expiry = expiry.replace(tzinfo=UTC)
        return self.clock() < expiry
