import uvicorn

from transfer_service.core.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "transfer_service.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.server.reload,
    )


if __name__ == "__main__":
    main()
