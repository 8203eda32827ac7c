from __future__ import annotations

import uvicorn

from .main import configure_logging
from .settings import get_settings


# PUBLIC_INTERFACE
def run() -> None:
    """Serve todo_api.main:app with uvicorn on HOST:PORT (default 0.0.0.0:5000)."""
    settings = get_settings()
    configure_logging(settings.log_level)
    uvicorn.run(
        "todo_api.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
