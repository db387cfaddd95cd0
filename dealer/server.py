from __future__ import annotations

import asyncio
import json
import logging
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Dict, List, Optional

import websockets

from fivecard.cards import parse_cards
from fivecard.exceptions import GameNotFoundError, NoPlayersError
from fivecard.models import Player
from fivecard.registry import GameRegistry, GameSession

LOGGER = logging.getLogger("dealer")

# DealerServer exposes the game registry to WebSocket clients. Transport
# concerns (envelopes, error codes) live here; FiveCardGame stays pure.

Handler = Callable[[Dict[str, object]], Awaitable[Dict[str, object]]]


class RequestError(Exception):
    def __init__(self, code: str, msg: str) -> None:
        super().__init__(msg)
        self.code = code
        self.msg = msg


class DealerServer:
    def __init__(self, registry: Optional[GameRegistry] = None, seed: Optional[int] = None) -> None:
        self.registry = registry or GameRegistry(seed=seed)
        self._handlers: Dict[str, Handler] = {
            "create_game": self._create_game,
            "add_player": self._add_player,
            "remove_player": self._remove_player,
            "deal": self._deal,
            "evaluate": self._evaluate,
            "reset": self._reset,
            "delete_game": self._delete_game,
            "list_games": self._list_games,
        }

    async def start(self, host: str = "0.0.0.0", port: int = 8765) -> None:
        async with websockets.serve(self._handle_connection, host, port):
            LOGGER.info("Dealer listening on %s:%s", host, port)
            await asyncio.Future()

    async def _handle_connection(self, websocket: Any) -> None:
        LOGGER.info("Client connected")
        try:
            async for raw in websocket:
                await self._dispatch(websocket, self._decode(raw))
        except websockets.ConnectionClosed:
            pass
        LOGGER.info("Client disconnected")

    async def _dispatch(self, websocket: Any, message: Dict[str, object]) -> None:
        msg_type = message.get("type")
        handler = self._handlers.get(msg_type) if isinstance(msg_type, str) else None
        if handler is None:
            await self._send_error(websocket, code="UNKNOWN_TYPE", msg="Unsupported message type")
            return

        try:
            payload = await handler(message)
        except RequestError as exc:
            code, msg = exc.code, exc.msg
        except GameNotFoundError as exc:
            code, msg = "GAME_NOT_FOUND", str(exc)
        except NoPlayersError as exc:
            code, msg = "NO_PLAYERS", str(exc)
        except ValueError as exc:
            code, msg = "INVALID_REQUEST", str(exc)
        else:
            await self._send_json(websocket, msg_type, payload)
            return

        LOGGER.warning("Rejected %s request: %s (%s)", msg_type, code, msg)
        await self._send_error(websocket, code=code, msg=msg)

    # Request handlers ------------------------------------------------

    async def _create_game(self, message: Dict[str, object]) -> Dict[str, object]:
        names = self._names(message, "players")
        session = self.registry.create_game(names)
        async with session.lock:
            return self._game_payload(session)

    async def _add_player(self, message: Dict[str, object]) -> Dict[str, object]:
        name = self._name(message)
        session = self._session(message)
        async with session.lock:
            session.game.add_player(Player(name))
            return self._game_payload(session)

    async def _remove_player(self, message: Dict[str, object]) -> Dict[str, object]:
        name = self._name(message)
        session = self._session(message)
        async with session.lock:
            player = session.game.find_player(name)
            if player is not None:
                session.game.remove_player(player)
            payload = self._game_payload(session)
            payload["closed"] = self.registry.discard_if_empty(session.game_id)
        return payload

    async def _deal(self, message: Dict[str, object]) -> Dict[str, object]:
        names = self._names(message, "players")
        if message.get("game_id") is None:
            session = self.registry.create_game(names)
            async with session.lock:
                try:
                    session.game.deal()
                except NoPlayersError:
                    self.registry.delete(session.game_id)
                    raise
                payload = session.game.deal_payload()
            payload["game_id"] = session.game_id
            return payload

        session = self._session(message)
        joining = [Player(name) for name in names]
        async with session.lock:
            for player in joining:
                session.game.add_player(player)
            session.game.deal()
            payload = session.game.deal_payload()
        payload["game_id"] = session.game_id
        return payload

    async def _evaluate(self, message: Dict[str, object]) -> Dict[str, object]:
        session = self._session(message)
        hands = message.get("hands") or {}
        if not isinstance(hands, dict):
            raise RequestError("BAD_SCHEMA", "hands must map player names to card labels")

        async with session.lock:
            game = session.game
            overrides = []
            for name, labels in hands.items():
                player = game.find_player(name)
                if player is None:
                    raise RequestError("UNKNOWN_PLAYER", f"No player named {name}")
                if not isinstance(labels, list):
                    raise RequestError("BAD_SCHEMA", "hand must be a list of card labels")
                overrides.append((player, parse_cards(labels)))
            # Posted hands replace what the engine dealt; validation decides if they are legitimate.
            for player, cards in overrides:
                player.hand[:] = cards
            game.validate_hands()
            ranked = game.determine_winners()
            payload = game.results_payload(ranked)
        payload["game_id"] = session.game_id
        return payload

    async def _reset(self, message: Dict[str, object]) -> Dict[str, object]:
        session = self._session(message)
        async with session.lock:
            session.game.reset()
            return self._game_payload(session)

    async def _delete_game(self, message: Dict[str, object]) -> Dict[str, object]:
        game_id = self._game_id(message)
        if not self.registry.delete(game_id):
            raise GameNotFoundError(game_id)
        return {"game_id": game_id, "closed": True}

    async def _list_games(self, message: Dict[str, object]) -> Dict[str, object]:
        return {"games": self.registry.list_games()}

    # Helpers ---------------------------------------------------------

    def _game_payload(self, session: GameSession) -> Dict[str, object]:
        payload = session.game.deal_payload()
        payload["game_id"] = session.game_id
        return payload

    def _session(self, message: Dict[str, object]) -> GameSession:
        return self.registry.get(self._game_id(message))

    def _game_id(self, message: Dict[str, object]) -> str:
        game_id = message.get("game_id")
        if not isinstance(game_id, str) or not game_id:
            raise RequestError("BAD_SCHEMA", "game_id required")
        return game_id

    def _name(self, message: Dict[str, object]) -> str:
        name = message.get("name")
        if not isinstance(name, str) or not name.strip():
            raise RequestError("BAD_SCHEMA", "name required")
        return name.strip()

    def _names(self, message: Dict[str, object], key: str) -> List[str]:
        names = message.get(key) or []
        if not isinstance(names, list) or not all(isinstance(name, str) for name in names):
            raise RequestError("BAD_SCHEMA", f"{key} must be a list of names")
        return names

    async def _send_json(self, websocket: Any, msg_type: str, payload: Dict[str, object]) -> None:
        try:
            await websocket.send(self._envelope(msg_type, payload))
        except websockets.ConnectionClosed:
            pass

    async def _send_error(self, websocket: Any, code: str, msg: str) -> None:
        await self._send_json(websocket, "error", {"code": code, "msg": msg})

    def _envelope(self, msg_type: str, payload: Dict[str, object]) -> str:
        body = {"type": msg_type, "v": 1, "ts": datetime.now(timezone.utc).isoformat()}
        body.update(payload)
        return json.dumps(body)

    def _decode(self, raw: str) -> Dict[str, object]:
        try:
            message = json.loads(raw)
        except json.JSONDecodeError:
            return {}
        return message if isinstance(message, dict) else {}
