"""Run the analysis proxy with uvicorn."""

import uvicorn

from app.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run("app.main:app", host=settings.gateway_host, port=settings.gateway_port)


if __name__ == "__main__":
    main()
