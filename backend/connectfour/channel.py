"""
Канал сообщений: двусторонний текстовый поток сессии.
Кадры приходят размеченным объединением; смысл в протоколе несёт только TextFrame.
"""
import asyncio
import logging
from dataclasses import dataclass
from typing import Protocol, Union

from fastapi import WebSocket

from .exceptions import TransportClosed, TransportSendFailure

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TextFrame:
    text: str


@dataclass(frozen=True)
class BinaryFrame:
    data: bytes = b""


@dataclass(frozen=True)
class PingFrame:
    data: bytes = b""


@dataclass(frozen=True)
class PongFrame:
    data: bytes = b""


@dataclass(frozen=True)
class CloseFrame:
    code: int = 1000


Frame = Union[TextFrame, BinaryFrame, PingFrame, PongFrame, CloseFrame]


class Channel(Protocol):
    async def send(self, text: str) -> None:
        """Отправить один текстовый кадр или поднять TransportSendFailure."""
        ...

    async def receive(self) -> Frame:
        """Следующий входящий кадр; TransportClosed, если поток закрыт."""
        ...


async def next_text(channel: Channel, poll_interval: float) -> str:
    """
    Ждать следующий текстовый кадр. Прочие кадры пропускаются с короткой
    паузой перед новым опросом. Таймаута нет.
    """
    while True:
        frame = await channel.receive()
        if isinstance(frame, TextFrame):
            return frame.text
        await asyncio.sleep(poll_interval)


class WebSocketChannel:
    """Канал поверх уже принятого WebSocket (Starlette/FastAPI)."""

    def __init__(self, ws: WebSocket, who: str):
        self.ws = ws
        self.who = who

    async def send(self, text: str) -> None:
        try:
            await self.ws.send_text(text)
        except Exception as e:
            logger.warning("send to %s failed: %s", self.who, e)
            raise TransportSendFailure(str(e)) from e

    async def receive(self) -> Frame:
        try:
            message = await self.ws.receive()
        except Exception as e:
            raise TransportClosed(str(e)) from e
        if message["type"] == "websocket.disconnect":
            raise TransportClosed(f"closed with code {message.get('code', 1000)}")
        text = message.get("text")
        if text is not None:
            return TextFrame(text)
        return BinaryFrame(message.get("bytes") or b"")
