"""
Entry point for the Employee Records API
"""

import sys
import os
import logging
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Add src directory to Python path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), 'src'))

from config.settings import HOST, PORT, LOG_LEVEL
from app import app

logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)

if __name__ == "__main__":
    import uvicorn
    logger.info(f"Starting Employee Records API on port {PORT}")
    uvicorn.run(app, host=HOST, port=PORT)
