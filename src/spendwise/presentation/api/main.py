"""Entry point for running the API with uvicorn."""

import uvicorn

from spendwise_config.settings import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "spendwise.presentation.api.app:create_app",
        factory=True,
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_debug,
    )


if __name__ == "__main__":
    main()
