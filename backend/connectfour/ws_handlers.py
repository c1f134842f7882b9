"""
Обработка одного соединения: ник -> пейринг -> партия.
Первая из двух сессий ждёт в слоте, вторая ведёт партию.
"""
import logging
import random

from fastapi import WebSocket

from .channel import Channel, WebSocketChannel, next_text
from .config import get_config
from .constants import MSG_ENTER_NICKNAME, MSG_MATCHMAKING, NICKNAME_LENGTH
from .exceptions import TransportError
from .match import Match, run_match
from .pairing import RendezvousRegistry, Session, registry

logger = logging.getLogger(__name__)


def derive_nickname(text: str) -> str:
    """Первые три символа в верхнем регистре (не длиннее трёх)."""
    return text[:NICKNAME_LENGTH].upper()[:NICKNAME_LENGTH]


async def negotiate_nickname(channel: Channel, poll_interval: float) -> str:
    """Запросить ник и дождаться первого текстового ответа. Может поднять TransportError."""
    await channel.send(MSG_ENTER_NICKNAME)
    return derive_nickname(await next_text(channel, poll_interval))


async def handle_session(
    channel: Channel,
    who: str,
    pairing: RendezvousRegistry = registry,
    *,
    first_player: str = "random",
    poll_interval: float = 0.3,
    rng: random.Random | None = None,
) -> Match | None:
    """
    Протокол для одного клиента. Возвращает Match, если партию вела эта
    сессия, и None, если она ждала соперника (или не дошла до пейринга).
    Возвращается только когда сессия больше не участвует в идущей партии.
    """
    try:
        nickname = await negotiate_nickname(channel, poll_interval)
    except TransportError as e:
        logger.info("client %s left before choosing a nickname: %s", who, e)
        return None
    logger.info("client %s is %s", who, nickname)

    session = Session(who=who, nickname=nickname, channel=channel)
    peer = await pairing.try_pair(session)
    if peer is not None:
        return await run_match(
            session, peer,
            first_player=first_player, poll_interval=poll_interval, rng=rng,
        )

    try:
        await channel.send(MSG_MATCHMAKING)
    except TransportError as e:
        logger.info("client %s lost while waiting: %s", who, e)
        if await pairing.withdraw(session):
            return None
    finally:
        session.ready.set()
    # каналом теперь владеет чужая задача
    await session.finished.wait()
    return None


async def ws_connect_and_loop(ws: WebSocket) -> None:
    """Принять сокет и вести сессию до конца её партии."""
    config = get_config()
    who = f"{ws.client.host}:{ws.client.port}" if ws.client else "unknown"
    user_agent = ws.headers.get("user-agent", "Unknown browser")
    try:
        await ws.accept()
        logger.info("WS: `%s` at %s connected", user_agent, who)
        await handle_session(
            WebSocketChannel(ws, who),
            who,
            first_player=config.first_player,
            poll_interval=config.poll_interval,
        )
    except Exception as e:
        logger.exception("WS: error %s: %s", who, e)
    finally:
        logger.info("WS: done with %s", who)
