from dataclasses import dataclass
import os

from dotenv import load_dotenv


@dataclass(frozen=True)
class Settings:
    bot_token: str
    owner_telegram_id: int
    timezone: str
    log_level: str


def load_settings() -> Settings:
    load_dotenv()

    bot_token = os.getenv("BOT_TOKEN", "").strip()
    owner_raw = os.getenv("OWNER_TELEGRAM_ID", "0").strip()
    tz = os.getenv("TZ", "Europe/Helsinki").strip() or "Europe/Helsinki"
    log_level = os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO"

    if not bot_token:
        raise RuntimeError("BOT_TOKEN missing in .env")
    try:
        owner_id = int(owner_raw)
    except ValueError:
        owner_id = 0
    if owner_id <= 0:
        raise RuntimeError("OWNER_TELEGRAM_ID missing/invalid in .env")

    return Settings(
        bot_token=bot_token,
        owner_telegram_id=owner_id,
        timezone=tz,
        log_level=log_level,
    )
