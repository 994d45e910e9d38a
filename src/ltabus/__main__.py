import uvicorn

from ltabus.core.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run("ltabus.main:app", host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
