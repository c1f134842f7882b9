"""
Shared test doubles: an in-memory Channel driven by a script of inbound frames.
"""
import asyncio
from collections import deque

import pytest

from connectfour.channel import TextFrame
from connectfour.exceptions import TransportClosed, TransportSendFailure
from connectfour.pairing import RendezvousRegistry

CLOSED = object()


class FakeChannel:
    """
    Inbound script items are strings (text frames), Frame objects, or CLOSED.
    An exhausted script behaves like a closed connection so tests never hang.
    """

    def __init__(self, *incoming, fail_on_send: int | None = None):
        self.sent: list[str] = []
        self._incoming = deque(incoming)
        # 1-based index of the first send that fails; every later send fails too
        self.fail_on_send = fail_on_send
        self.received = 0

    def break_sends(self) -> None:
        self.fail_on_send = len(self.sent) + 1

    async def send(self, text: str) -> None:
        if self.fail_on_send is not None and len(self.sent) + 1 >= self.fail_on_send:
            raise TransportSendFailure("broken pipe")
        self.sent.append(text)

    async def receive(self):
        if not self._incoming:
            raise TransportClosed("script exhausted")
        item = self._incoming.popleft()
        if item is CLOSED:
            raise TransportClosed("closed by peer")
        self.received += 1
        if isinstance(item, str):
            return TextFrame(item)
        return item


async def wait_until_waiting(registry: RendezvousRegistry) -> None:
    while registry.waiting is None:
        await asyncio.sleep(0)


@pytest.fixture
def registry() -> RendezvousRegistry:
    return RendezvousRegistry()
