from __future__ import annotations

from esper import World

from sumstack.components.game_state import GameMode, GameState
from sumstack.components.session import Screen, Session


def get_session(world: World) -> Session:
    for _, session in world.get_component(Session):
        return session
    raise RuntimeError("Session component not found")


def current_game(world: World) -> GameState | None:
    return get_session(world).game


def accepts_input(session: Session) -> bool:
    """True while a game is on screen, unpaused and still running."""
    return (
        session.screen is Screen.PLAYING
        and session.game is not None
        and not session.paused
        and not session.game.is_game_over
    )


def timer_should_run(session: Session) -> bool:
    return accepts_input(session) and session.game.mode is GameMode.TIME
