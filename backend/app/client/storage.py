"""
Search state storage — JSON file persistence for the persisted state fields.
Version: 1.0.0
"""
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from app.client.state import SearchState
from app.core.config import get_settings

logger = logging.getLogger(__name__)


class SearchStateStorage:
    """Loads and saves view mode, sort, page size, history and favorites."""

    def __init__(self, path: Optional[str] = None) -> None:
        self._path = Path(path or get_settings().search_state_path)

    @property
    def path(self) -> Path:
        return self._path

    def read(self) -> Dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            with self._path.open("r", encoding="utf-8") as fh:
                data = json.load(fh)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring unreadable search state at {self._path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def load(self, state: Optional[SearchState] = None) -> SearchState:
        """Restore persisted fields into ``state`` (or a fresh one)."""
        state = state or SearchState()
        data = self.read()
        if data:
            try:
                state.restore(data)
            except (TypeError, ValueError) as e:
                logger.warning(f"Ignoring malformed search state at {self._path}: {e}")
        return state

    def save(self, state: SearchState) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        with self._path.open("w", encoding="utf-8") as fh:
            json.dump(state.persisted(), fh, ensure_ascii=False, indent=2)
