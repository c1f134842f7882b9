"""Исключения сервера партий."""


class ConnectFourError(Exception):
    """Базовый класс всех ошибок сервера."""


# --- фатальные: партия заканчивается ---
class TransportError(ConnectFourError):
    """Канал сообщений больше нельзя использовать."""


class TransportSendFailure(TransportError):
    """Текстовый кадр не доставлен."""


class TransportClosed(TransportError):
    """Клиент закрыл канал или приём завершился ошибкой."""


class SessionLost(TransportError):
    """Ошибка транспорта с привязкой к сессии, чей канал отказал."""

    def __init__(self, session, cause: TransportError):
        super().__init__(f"{session.who}: {cause}")
        self.session = session
        self.cause = cause


# --- восстановимые: тот же игрок ходит снова ---
class ProtocolParseError(ConnectFourError):
    """Текст хода не является номером колонки."""


class InvalidMove(ConnectFourError):
    """Колонка вне доски или уже заполнена."""
