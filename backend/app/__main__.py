import logging

import uvicorn

from app.config import settings

logger = logging.getLogger("app")


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logger.info("Job portal server listening on port %s", settings.port)
    uvicorn.run("app.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
