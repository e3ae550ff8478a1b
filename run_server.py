"""
Run the CryptoCast backend server.
"""
import logging
import os

# Load environment
from dotenv import load_dotenv

root_dir = os.path.dirname(os.path.abspath(__file__))
load_dotenv(os.path.join(root_dir, ".env"))

# Run uvicorn
import uvicorn

from cryptocast.core.config import settings

if __name__ == "__main__":
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger = logging.getLogger("cryptocast")
    logger.info("Starting CryptoCast Backend Server...")
    logger.info(f"API Docs: http://localhost:{settings.port}/docs")

    uvicorn.run(
        "cryptocast.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level,
    )
