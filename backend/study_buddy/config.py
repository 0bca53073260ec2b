"""Configuration settings for Study Buddy."""
import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables
# Try to find .env file in project root or backend directory
BASE_DIR = Path(__file__).parent.parent.parent
BACKEND_DIR = BASE_DIR / "backend"

# Try loading .env from project root first, then backend directory
ENV_FILE = None
env_paths = [BASE_DIR / ".env", BACKEND_DIR / ".env"]
for env_path in env_paths:
    if env_path.exists():
        load_dotenv(dotenv_path=env_path, override=True)
        ENV_FILE = env_path
        break
else:
    # Fallback to default behavior (look in current directory)
    load_dotenv()

# API Configuration
API_HOST = os.getenv("API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("API_PORT", 8000))
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Google Gemini API Configuration
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY", "")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-1.5-flash")
GEMINI_MAX_TOKENS = int(os.getenv("GEMINI_MAX_TOKENS", 250))  # Short answers
GEMINI_TEMPERATURE = float(os.getenv("GEMINI_TEMPERATURE", 0.4))  # Lower = more focused
GEMINI_TIMEOUT = float(os.getenv("GEMINI_TIMEOUT", 30.0))  # Overall timeout before falling back

# Chat page
APP_NAME = os.getenv("APP_NAME", "Study Buddy")
APP_TAGLINE = os.getenv("APP_TAGLINE", "Your AI Study Assistant")
WELCOME_MESSAGE = os.getenv(
    "WELCOME_MESSAGE",
    "Hi there! I'm Study Buddy, your AI study assistant. Ask me any academic "
    "questions you have, and I'll do my best to help you learn!"
)
