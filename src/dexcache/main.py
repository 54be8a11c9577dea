"""DexCache - Main application entry point."""

import uvicorn

from dexcache.api.app import create_app
from dexcache.config import get_settings

app = create_app()


def main() -> None:
    """Run the application with uvicorn."""
    settings = get_settings()
    uvicorn.run(
        "dexcache.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )


if __name__ == "__main__":
    main()
