"""
Configuration module for the AI Image Generator service.
Loads environment variables and provides configuration constants.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Storage Paths
BASE_DIR = Path(__file__).parent
IMAGES_DIR = Path(os.getenv("IMAGES_DIR", str(BASE_DIR.parent / "generated-images")))

# Server Configuration
API_HOST = os.getenv("API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("API_PORT", "5000"))
PUBLIC_BASE_URL = os.getenv("PUBLIC_BASE_URL", f"http://localhost:{API_PORT}")
CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*").split(",")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Rendering Configuration
FONT_PATH = os.getenv("FONT_PATH", "")
BOLD_FONT_PATH = os.getenv("BOLD_FONT_PATH", "")

SERVICE_NAME = "AI Image Generator"
