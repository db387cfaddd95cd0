from __future__ import annotations

import asyncio
import logging
import time
import uuid
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from .exceptions import GameNotFoundError
from .game import FiveCardGame
from .models import GameConfig, Player

LOGGER = logging.getLogger("fivecard.registry")


@dataclass
class GameSession:
    game_id: str
    game: FiveCardGame
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    created_at: float = field(default_factory=time.time)


class GameRegistry:
    """Maps opaque game ids to independent engine sessions.

    Every session carries its own lock; hold it for the whole of any
    engine call sequence on that game.
    """

    def __init__(self, seed: Optional[int] = None) -> None:
        self._sessions: Dict[str, GameSession] = {}
        self._seed = seed

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, game_id: object) -> bool:
        return game_id in self._sessions

    def create_game(self, player_names: Optional[Iterable[str]] = None, seed: Optional[int] = None) -> GameSession:
        game = FiveCardGame(GameConfig(seed=self._seed if seed is None else seed))
        for name in player_names or ():
            game.add_player(Player(name))

        game_id = uuid.uuid4().hex
        session = GameSession(game_id=game_id, game=game)
        self._sessions[game_id] = session
        LOGGER.info("Created game %s with %d players", game_id, game.player_count)
        return session

    def get(self, game_id: str) -> GameSession:
        session = self._sessions.get(game_id)
        if session is None:
            raise GameNotFoundError(game_id)
        return session

    def delete(self, game_id: str) -> bool:
        session = self._sessions.pop(game_id, None)
        if session is None:
            return False
        LOGGER.info("Deleted game %s", game_id)
        return True

    def discard_if_empty(self, game_id: str) -> bool:
        session = self._sessions.get(game_id)
        if session is None or session.game.player_count:
            return False
        return self.delete(game_id)

    def list_games(self) -> List[Dict[str, object]]:
        now = time.time()
        return [
            {
                "game_id": game_id,
                "players": [player.name for player in session.game.players],
                "phase": session.game.phase.value,
                "age": now - session.created_at,
            }
            for game_id, session in self._sessions.items()
        ]
