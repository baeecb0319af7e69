import logging

import uvicorn

from infrastructure.settings import get_settings


def run() -> None:
    settings = get_settings()

    logging.basicConfig(
        level=settings.logging_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    print(
        f"Starting server at http://{settings.host}:{settings.port} "
        f"(Reload: {settings.reload}, ORM: {settings.orm})"
    )

    uvicorn.run(
        "backend_fastapi.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
        log_level=settings.log_level,
    )


if __name__ == "__main__":
    run()
