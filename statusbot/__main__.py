"""Run the StatusBot API with uvicorn: `python -m statusbot`."""

import uvicorn

from statusbot.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "statusbot.main:app", host=settings.host, port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
