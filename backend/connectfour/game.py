"""
Модель доски: падение фишки вниз и поиск четырёх в ряд.
"""
from enum import Enum

from .constants import BOARD_HEIGHT, BOARD_WIDTH, WIN_LENGTH


class Player(Enum):
    FIRST = "1"
    SECOND = "2"

    @property
    def label(self) -> str:
        return self.value

    def flip(self) -> "Player":
        return Player.SECOND if self is Player.FIRST else Player.FIRST

    def __str__(self) -> str:
        return self.value


# (шаг по колонке, шаг по строке); строки считаются снизу вверх
DIRECTIONS: tuple[tuple[int, int], ...] = (
    (0, 1),   # вертикаль
    (1, 0),   # горизонталь
    (1, 1),   # диагональ вверх
    (1, -1),  # диагональ вниз
)


class Board:
    def __init__(self, width: int = BOARD_WIDTH, height: int = BOARD_HEIGHT):
        self.width = width
        self.height = height
        # columns[c][r], r == 0 это нижняя строка
        self._columns: list[list[Player | None]] = [
            [None] * height for _ in range(width)
        ]

    def cell(self, column: int, row: int) -> Player | None:
        return self._columns[column][row]

    def column_height(self, column: int) -> int:
        """Сколько фишек уже лежит в ``column``."""
        return sum(1 for c in self._columns[column] if c is not None)

    def is_full(self) -> bool:
        return all(self.column_height(c) == self.height for c in range(self.width))

    def place(self, column: int, player: Player) -> bool:
        """
        Бросить фишку в нижнюю свободную клетку ``column``.
        Возвращает False и не трогает доску, если колонка вне диапазона
        или заполнена.
        """
        if not 0 <= column < self.width:
            return False
        cells = self._columns[column]
        for row, occupant in enumerate(cells):
            if occupant is None:
                cells[row] = player
                return True
        return False

    def check_win(self, player: Player) -> bool:
        """
        Полный пересчёт: есть ли у ``player`` WIN_LENGTH клеток подряд в любом
        направлении. Каждая клетка пробуется как начало линии; счётчик
        сбрасывается на любой чужой или пустой клетке.
        """
        for dc, dr in DIRECTIONS:
            for column in range(self.width):
                for row in range(self.height):
                    run = 0
                    c, r = column, row
                    while self._in_bounds(c, r):
                        if self._columns[c][r] is player:
                            run += 1
                            if run >= WIN_LENGTH:
                                return True
                        else:
                            run = 0
                        c += dc
                        r += dr
        return False

    def render(self) -> str:
        """Текстовый дамп для debug-логов, верхняя строка первой."""
        lines = []
        for row in reversed(range(self.height)):
            lines.append(" ".join(
                self._columns[c][row].label if self._columns[c][row] else "."
                for c in range(self.width)
            ))
        lines.append(" ".join(str(c) for c in range(self.width)))
        return "\n".join(lines)

    def _in_bounds(self, column: int, row: int) -> bool:
        return 0 <= column < self.width and 0 <= row < self.height
