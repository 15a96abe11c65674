import logging

import uvicorn

from app import app  # noqa: F401
from config import (DEBUG, UVICORN_HOST, UVICORN_PORT, UVICORN_SSL_CERTFILE,
                    UVICORN_SSL_KEYFILE, UVICORN_UDS)

logger = logging.getLogger("esimshop.main")


if __name__ == "__main__":
    bind_args = {}

    if UVICORN_SSL_CERTFILE and UVICORN_SSL_KEYFILE:
        bind_args['ssl_certfile'] = UVICORN_SSL_CERTFILE
        bind_args['ssl_keyfile'] = UVICORN_SSL_KEYFILE

    if UVICORN_UDS:
        bind_args['uds'] = UVICORN_UDS
    else:
        bind_args['host'] = UVICORN_HOST if UVICORN_HOST else '0.0.0.0'
        bind_args['port'] = UVICORN_PORT if UVICORN_PORT else 8000

    try:
        uvicorn.run(
            "app:app",
            reload=DEBUG,
            log_level="debug" if DEBUG else "info",
            workers=1,
            **bind_args
        )
    except Exception as e:
        logger.critical(f"Failed to start Uvicorn: {e}", exc_info=True)
        raise
