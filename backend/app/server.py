import logging

import uvicorn

from .config import get_settings
from .main import create_app


def main() -> None:
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    logging.getLogger(__name__).info(
        "serving on %s:%s (tls=%s)", settings.host, settings.port, settings.tls_enabled
    )
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        ssl_certfile=settings.ssl_certfile,
        ssl_keyfile=settings.ssl_keyfile,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
