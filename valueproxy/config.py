import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv(os.path.join(os.getcwd(), ".env"))

@dataclass
class Settings:
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "3000"))
    cache_ttl: float = float(os.getenv("CACHE_TTL", "3600"))
    http_timeout: float = float(os.getenv("HTTP_TIMEOUT", "10.0"))
    user_agent: str = os.getenv("USER_AGENT", "AvatarValueProxy/scan-wide")
    profile_url_template: str = os.getenv("PROFILE_URL_TEMPLATE", "https://www.rolimons.com/player/{user_id}")
    debug_items_limit: int = int(os.getenv("DEBUG_ITEMS_LIMIT", "40"))
    debug_dir: str = os.getenv("DEBUG_DIR", "debug")

settings = Settings()
