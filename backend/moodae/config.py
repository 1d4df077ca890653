# backend/moodae/config.py
import logging
from zoneinfo import ZoneInfo

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Insights engine configuration"""

    # Database (journal entries are read from here by the SQL entry source)
    DATABASE_URL: str = "sqlite:///./moodae.db"

    # Application
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Calendar
    TIMEZONE: str = "UTC"           # IANA name, used for calendar-day grouping
    WEEK_START: str = "monday"      # 'monday' | 'sunday'

    # Insights
    SUGGESTED_CATEGORY_LIMIT: int = 4
    INSIGHT_CACHE_SIZE: int = 64

    class Config:
        env_file = ".env"
        case_sensitive = True

    @property
    def tzinfo(self) -> ZoneInfo:
        return ZoneInfo(self.TIMEZONE)


settings = Settings()


def configure_logging(level: str | None = None) -> None:
    """Apply the standard log format. Safe to call more than once."""
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=(level or settings.LOG_LEVEL).upper(),
    )
    if not settings.DEBUG:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
