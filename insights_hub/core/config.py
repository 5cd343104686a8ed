from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    PROJECT_NAME: str = "AI Insights Hub"
    API_STR: str = "/api"
    GEMINI_API_KEY: str
    GEMINI_CHAT_MODEL: str = "gemini-2.5-flash"
    GEMINI_TEMPERATURE: float = 0
    SUMMARY_MIN_LENGTH: int = 100
    CHAT_CONTACT_AUTHOR_NUDGE: bool = True
    # feedback/share mail; the sender pair is optional so a missing secret
    # surfaces as a ConfigurationError instead of a startup failure
    FEEDBACK_SENDER_EMAIL: str | None = None
    FEEDBACK_SENDER_APP_PASSWORD: str | None = None
    FEEDBACK_RECIPIENT_EMAIL: str | None = None
    SMTP_HOST: str = "smtp.gmail.com"
    SMTP_PORT: int = 465
    SMTP_TIMEOUT_SEC: float | None = None
    SITE_URL: str = "http://localhost:3000"
    CORS_ORIGINS: list[str] = ["*"]
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

settings = Settings()
