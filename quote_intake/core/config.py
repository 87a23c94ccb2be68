from pydantic import field_validator
from pydantic_settings import BaseSettings

FALSY_FLAGS = {"", "0", "false", "no", "off"}

class Settings(BaseSettings):
    APP_NAME: str = "Quote Intake Service"

    # Outbound email
    EMAIL_PROVIDER: str = "resend"
    EMAIL_FROM: str = ""
    EMAIL_TO: str = ""
    RESEND_API_KEY: str = ""
    RESEND_API_URL: str = "https://api.resend.com/emails"
    DEBUG_EMAIL_ERRORS: bool = False

    # Empty URL disables persistence
    DATABASE_URL: str = ""
    DATABASE_ECHO: bool = False

    LOG_DIR: str = "logs"
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"

    @field_validator("DEBUG_EMAIL_ERRORS", mode="before")
    @classmethod
    def parse_debug_flag(cls, value):
        # Blank or a falsy word is off, any other text is on
        if isinstance(value, str):
            return value.strip().lower() not in FALSY_FLAGS
        return value

settings = Settings()


def get_settings() -> Settings:
    return settings
