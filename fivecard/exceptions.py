class NoPlayersError(RuntimeError):
    """Raised when dealing or scoring a game whose roster is empty."""

    def __init__(self, msg: str = "No players are available in the game.") -> None:
        super().__init__(msg)


class GameNotFoundError(KeyError):
    def __init__(self, game_id: str) -> None:
        super().__init__(game_id)
        self.game_id = game_id

    def __str__(self) -> str:
        return f"Game not found: {self.game_id}"
