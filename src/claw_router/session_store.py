"""Session model-override storage.

Persists the model chosen for a caller-supplied session id in a single
JSON file, so a host can pin follow-up turns of a session to that model.
Writes go to a temporary file that then replaces the store atomically.
"""

import json
import logging
import os
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

from .router.types import Tier

logger = logging.getLogger(__name__)

DEFAULT_STORE_PATH = Path.home() / ".claw-router" / "session_overrides.json"


def get_store_path() -> Path:
    """Resolve the store path, honouring CLAW_ROUTER_SESSION_STORE."""
    env_path = os.getenv("CLAW_ROUTER_SESSION_STORE")
    if env_path:
        return Path(env_path).expanduser()
    return DEFAULT_STORE_PATH


class SessionOverrideStore:
    """Thread-safe JSON file mapping session id -> model override."""

    def __init__(self, path: Optional[Path] = None):
        """Initialize the store.

        Args:
            path: JSON file location (default from get_store_path())
        """
        self.path = Path(path) if path is not None else get_store_path()
        self._lock = threading.Lock()

    def _read(self) -> Dict[str, Dict[str, Any]]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.warning(f"Corrupt session store {self.path}, starting empty: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Unexpected session store layout in {self.path}, starting empty")
            return {}
        return data

    def _write(self, data: Dict[str, Dict[str, Any]]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
        os.replace(tmp_path, self.path)

    def set(self, session_id: str, model: str, tier: Optional[Tier] = None) -> Dict[str, Any]:
        """Record the model override for a session.

        Args:
            session_id: Caller-supplied session identifier
            model: Model id to pin the session to
            tier: Tier that produced the choice, if known

        Returns:
            The stored entry

        Raises:
            ValueError: If session_id or model is empty
        """
        if not session_id:
            raise ValueError("session_id must be a non-empty string")
        if not model:
            raise ValueError("model must be a non-empty string")

        entry = {
            "model": model,
            "tier": tier.value if tier is not None else None,
            "updated_at": datetime.now(timezone.utc).isoformat(),
        }
        with self._lock:
            data = self._read()
            data[session_id] = entry
            self._write(data)
        logger.debug(f"Session {session_id} pinned to {model}")
        return entry

    def get(self, session_id: str) -> Optional[Dict[str, Any]]:
        """Return the stored entry for a session, or None."""
        with self._lock:
            return self._read().get(session_id)

    def clear(self, session_id: str) -> bool:
        """Remove a session override.

        Returns:
            True if an entry was removed
        """
        with self._lock:
            data = self._read()
            if session_id not in data:
                return False
            del data[session_id]
            self._write(data)
        return True

    def all(self) -> Dict[str, Dict[str, Any]]:
        with self._lock:
            return self._read()
