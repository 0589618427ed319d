import os
from dotenv import load_dotenv

load_dotenv()

class Settings:
    API_BASE_URL = os.getenv("MK_API_BASE_URL", "https://off.energy.mk.ua")
    API_TIMEOUT = float(os.getenv("MK_API_TIMEOUT", "15"))
    TIMEZONE = os.getenv("MK_TIMEZONE", "Europe/Kyiv")
    HOST = os.getenv("MK_HOST", "0.0.0.0")
    PORT = int(os.getenv("MK_PORT", "8000"))

settings = Settings()
