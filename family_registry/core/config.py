from pydantic_settings import BaseSettings, SettingsConfigDict
class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="FAMILY_REGISTRY_", env_file=".env", extra="ignore")
    DATABASE_URL: str = "sqlite:///./family_registry.db"
    SQLITE_BUSY_TIMEOUT: float = 30.0

    SECRET_KEY: str = "change-me"
    ACCESS_TOKEN_MIN: int = 60 * 24
    BCRYPT_ROUNDS: int = 12
    TEMP_PASSWORD_LENGTH: int = 12

    MAX_FAILED_LOGINS: int = 5
    LOCKOUT_MINUTES: int = 15

    # ser_no collisions with a concurrent approval are retried this many times
    APPROVAL_MAX_RETRIES: int = 3

    LOG_LEVEL: str = "INFO"

    ADMIN_USERNAME: str | None = None
    ADMIN_PASSWORD: str | None = None
settings = Settings()
