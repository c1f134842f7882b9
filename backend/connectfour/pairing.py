"""
Пейринг через один слот ожидания (in-memory).
Второй пришедший забирает ждущую сессию и ведёт партию за обоих.
"""
import asyncio
import logging
from dataclasses import dataclass, field

from .channel import Channel

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class Session:
    who: str  # адрес клиента, только для логов
    nickname: str
    channel: Channel
    # выставляется после отправки "matchmaking"; писать в канал можно только после
    ready: asyncio.Event = field(default_factory=asyncio.Event)
    # выставляет ведущий партию, когда она закончилась
    finished: asyncio.Event = field(default_factory=asyncio.Event)


class RendezvousRegistry:
    """
    Хранит не больше одной ждущей Session. Замок берётся только чтобы
    проверить или заменить слот, никогда на время отправки или приёма.
    """

    def __init__(self):
        self._lock = asyncio.Lock()
        self._waiting: Session | None = None

    @property
    def waiting(self) -> Session | None:
        return self._waiting

    async def try_pair(self, session: Session) -> Session | None:
        """
        Забрать ждущую сессию, если она есть, иначе оставить ``session`` в
        слоте. Возвращает соперника или None, если ждать теперь вызывающему.
        """
        async with self._lock:
            peer, self._waiting = self._waiting, None
            if peer is None:
                self._waiting = session
        if peer is None:
            logger.info("%s (%s) waiting for an opponent", session.nickname, session.who)
        else:
            logger.info("paired %s (%s) with %s (%s)",
                        session.nickname, session.who, peer.nickname, peer.who)
        return peer

    async def withdraw(self, session: Session) -> bool:
        """Убрать ``session`` из слота, если она всё ещё ждёт."""
        async with self._lock:
            if self._waiting is session:
                self._waiting = None
                return True
            return False


registry = RendezvousRegistry()
