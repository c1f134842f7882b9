"""Точка входа для ``python -m connectfour``."""
import uvicorn

from .config import get_config


def main() -> None:
    config = get_config()
    uvicorn.run("connectfour.main:app", host=config.host, port=config.port, reload=False)


if __name__ == "__main__":
    main()
