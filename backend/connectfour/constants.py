"""Размеры доски и текстовый протокол."""

BOARD_WIDTH = 7
BOARD_HEIGHT = 6
WIN_LENGTH = 4
NICKNAME_LENGTH = 3

# сервер -> клиент
MSG_ENTER_NICKNAME = "enter nickname:"
MSG_MATCHMAKING = "matchmaking"
MSG_MATCHED = "matched against: {nickname}"
MSG_ROLE = "you are player:{role}"
MSG_PROMPT = f"which column do you want to place (0-{BOARD_WIDTH - 1})"
MSG_PLACEMENT = "player:{role} placement:{column}"
MSG_INVALID_PLACEMENT = "invalid placement"
MSG_INVALID_INPUT = "invalid input"
MSG_WINNER = "winner! player:{role}"
MSG_DRAW = "draw!"
MSG_PEER_DISCONNECTED = "peer disconnected"
