"""
VoiceScreen - Timed Voice Interview Simulator

Main application entry point.
"""

import logging

from voicescreen.app import create_app
from voicescreen.config.settings import get_settings

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


# Refuses to start without OPENAI_API_KEY and SESSION_SECRET
settings = get_settings()

app = create_app(settings)


# ============================================================================
# RUN SERVER
# ============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
