import logging

from podcast_gateway.api.server import create_app
from podcast_gateway.config.logging_setup import setup_logging
from podcast_gateway.config.settings import load_settings

settings = load_settings()
setup_logging(settings)

app = create_app(settings)

if settings.openai_api_key:
    logging.getLogger(__name__).info("Podcast question gateway ready")
else:
    logging.getLogger(__name__).warning("OPENAI_API_KEY is not set; the chat proxy will return 500")

if __name__ == "__main__":
    app.run(port=settings.port, debug=True)
