"""
Run the gateway: ``python -m ghostwriter_rpc.gateway``.
"""

import uvicorn

from ..config import get_settings
from ..logging import setup_logging
from .main import create_app


def main() -> None:
    settings = get_settings()
    setup_logging(settings.service_name, settings.log_level, structured=settings.structured_logging)
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
