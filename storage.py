import logging
from typing import Any, MutableMapping, Optional

from pydantic import ValidationError

from models import GameState

logger = logging.getLogger(__name__)

STORAGE_KEY = "hw-2048-react-state"


class SnapshotStore:
    """把游戏状态以 JSON 文本保存到键值存储（如 Flask session）的固定键下，读写失败都不抛出。"""

    def __init__(self, backend: MutableMapping[str, Any], key: str = STORAGE_KEY):
        self.backend = backend
        self.key = key

    def save(self, state: GameState) -> None:
        """保存存档，失败时忽略。"""
        try:
            self.backend[self.key] = state.model_dump_json()
        except Exception:
            logger.debug("Could not save game state under %r", self.key, exc_info=True)

    def load(self) -> Optional[GameState]:
        """读取存档，没有存档或存档损坏时返回 None。"""
        try:
            raw = self.backend.get(self.key)
        except Exception:
            logger.debug("Could not load game state from %r", self.key, exc_info=True)
            return None

        if not raw:
            return None

        try:
            return GameState.model_validate_json(raw)
        except (ValidationError, TypeError):
            logger.debug("Ignoring malformed game state under %r", self.key, exc_info=True)
            return None

    def clear(self) -> None:
        """删除存档，失败时忽略。"""
        try:
            self.backend.pop(self.key, None)
        except Exception:
            logger.debug("Could not clear game state under %r", self.key, exc_info=True)
