"""
Serve the built NetZero front-end.

Run with: python serve.py
"""
import logging

from netzero_chat.config.settings import get_settings
from netzero_chat.static_site import create_static_app


def run():
    import uvicorn

    logging.basicConfig(level=logging.INFO)
    settings = get_settings()
    uvicorn.run(
        create_static_app(settings.static_dir),
        host="localhost",
        port=settings.static_port,
    )


if __name__ == "__main__":
    run()
