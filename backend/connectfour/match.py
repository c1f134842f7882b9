"""
Одна партия Connect Four между двумя сессиями.
Задача, вызвавшая run_match, владеет обоими каналами до конца партии.
"""
import logging
import random
import re
from dataclasses import dataclass, field

from .channel import next_text
from .constants import (
    MSG_DRAW,
    MSG_INVALID_INPUT,
    MSG_INVALID_PLACEMENT,
    MSG_MATCHED,
    MSG_PEER_DISCONNECTED,
    MSG_PLACEMENT,
    MSG_PROMPT,
    MSG_ROLE,
    MSG_WINNER,
)
from .exceptions import (
    InvalidMove,
    ProtocolParseError,
    SessionLost,
    TransportError,
)
from .game import Board, Player
from .pairing import Session

logger = logging.getLogger(__name__)

_COLUMN_RE = re.compile(r"\+?[0-9]+")
_MAX_DIGITS = 18


@dataclass
class Match:
    players: dict[Player, Session]
    board: Board = field(default_factory=Board)
    current_turn: Player = Player.FIRST
    result: str | None = None  # None | "win" | "draw" | "disconnect"
    winner: Player | None = None

    def session(self, player: Player) -> Session:
        return self.players[player]

    def opponent_of(self, session: Session) -> Session:
        first = self.players[Player.FIRST]
        return self.players[Player.SECOND] if session is first else first

    async def send(self, session: Session, text: str) -> None:
        try:
            await session.channel.send(text)
        except TransportError as e:
            raise SessionLost(session, e) from e

    async def broadcast(self, text: str) -> None:
        await self.send(self.players[Player.FIRST], text)
        await self.send(self.players[Player.SECOND], text)

    async def announce(self, text: str) -> None:
        """
        Итог партии обеим сторонам. Каждая отправка независима:
        сбой у одного игрока не мешает доставке второму.
        """
        for player in (Player.FIRST, Player.SECOND):
            session = self.players[player]
            try:
                await session.channel.send(text)
            except TransportError as e:
                logger.info("could not deliver %r to %s: %s", text, session.who, e)

    async def read_move(self, poll_interval: float) -> str:
        session = self.session(self.current_turn)
        try:
            return await next_text(session.channel, poll_interval)
        except TransportError as e:
            raise SessionLost(session, e) from e


def parse_column(text: str) -> int:
    """Номер колонки из текста клиента: только ASCII-цифры, допускается ведущий «+»."""
    if not _COLUMN_RE.fullmatch(text):
        raise ProtocolParseError(f"not a column number: {text!r}")
    # не длиннее беззнакового 64-битного числа
    if len(text.lstrip("+").lstrip("0")) > _MAX_DIGITS:
        raise ProtocolParseError(f"column number too long ({len(text)} chars)")
    return int(text)


def apply_move(match: Match, column: int) -> None:
    if not match.board.place(column, match.current_turn):
        raise InvalidMove(f"column {column} is not playable")


def assign_roles(arrival: Session, waiter: Session, policy: str = "random",
                 rng: random.Random | None = None) -> dict[Player, Session]:
    """
    Кто играет за FIRST (и ходит первым).
    ``arrival``: сессия, которая завершила пейринг.
    """
    if policy == "arrival":
        first_is_arrival = True
    elif policy == "waiter":
        first_is_arrival = False
    else:
        first_is_arrival = (rng or random).choice((True, False))
    if first_is_arrival:
        return {Player.FIRST: arrival, Player.SECOND: waiter}
    return {Player.FIRST: waiter, Player.SECOND: arrival}


async def run_match(
    arrival: Session,
    waiter: Session,
    *,
    first_player: str = "random",
    poll_interval: float = 0.3,
    rng: random.Random | None = None,
) -> Match:
    """
    Объявить пару, раздать роли и вести ходы до победы, ничьей или обрыва
    соединения. На выходе обе сессии помечаются завершёнными.
    """
    match = Match(players=assign_roles(arrival, waiter, first_player, rng))
    try:
        await waiter.ready.wait()
        await match.send(arrival, MSG_MATCHED.format(nickname=waiter.nickname))
        await match.send(waiter, MSG_MATCHED.format(nickname=arrival.nickname))
        for player in (Player.FIRST, Player.SECOND):
            await match.send(match.session(player), MSG_ROLE.format(role=player))
        logger.info(
            "match started: player:1 %s (%s) vs player:2 %s (%s)",
            match.session(Player.FIRST).nickname, match.session(Player.FIRST).who,
            match.session(Player.SECOND).nickname, match.session(Player.SECOND).who,
        )
        await _turn_loop(match, poll_interval)
    except SessionLost as e:
        await _abort(match, e)
    finally:
        arrival.finished.set()
        waiter.finished.set()
    return match


async def _turn_loop(match: Match, poll_interval: float) -> None:
    while True:
        mover = match.session(match.current_turn)
        await match.send(mover, MSG_PROMPT)
        text = await match.read_move(poll_interval)
        try:
            column = parse_column(text)
            apply_move(match, column)
        except ProtocolParseError:
            await match.send(mover, MSG_INVALID_INPUT)
            continue
        except InvalidMove:
            await match.send(mover, MSG_INVALID_PLACEMENT)
            continue

        await match.broadcast(MSG_PLACEMENT.format(role=match.current_turn, column=column))
        logger.debug("board after player:%s\n%s", match.current_turn, match.board.render())

        if match.board.check_win(match.current_turn):
            match.result = "win"
            match.winner = match.current_turn
            logger.info("player:%s (%s) won", match.current_turn, mover.nickname)
            await match.announce(MSG_WINNER.format(role=match.current_turn))
            return
        if match.board.is_full():
            match.result = "draw"
            logger.info("board full, draw")
            await match.announce(MSG_DRAW)
            return
        match.current_turn = match.current_turn.flip()


async def _abort(match: Match, error: SessionLost) -> None:
    """Поражение обрывом: одно уведомление уцелевшей стороне, без повторов."""
    match.result = "disconnect"
    logger.info("client %s abruptly disconnected", error.session.who)
    survivor = match.opponent_of(error.session)
    try:
        await survivor.channel.send(MSG_PEER_DISCONNECTED)
    except TransportError as e:
        logger.info("could not notify %s: %s", survivor.who, e)
