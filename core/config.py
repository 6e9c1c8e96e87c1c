from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    DB_USER: str = ""
    DB_PASSWORD: str = ""
    DB_HOST: str = "localhost"
    DB_PORT: str = "3306"
    DB_NAME: str = "portfolio"
    # Full SQLAlchemy URL; takes precedence over the DB_* parts when set
    DATABASE_URL: str | None = None

    ACCESS_TOKEN_SECRET: str
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24
    BCRYPT_ROUNDS: int = 10
    TOKEN_REVOCATION_BACKEND: str = "memory"  # memory | database

    STORAGE_BACKEND: str = "s3"  # s3 | local
    MEDIA_DIR: str = "media"
    MEDIA_URL_PATH: str = "/media"
    BACKEND_URL: str = "http://localhost:8000"
    S3_BUCKET: str = ""
    S3_REGION: str = "us-east-1"
    AWS_ACCESS_KEY_ID: str | None = None
    AWS_SECRET_ACCESS_KEY: str | None = None
    S3_PUBLIC_URL: str | None = None

    SMTP_HOST: str = "smtp.gmail.com"
    SMTP_PORT: int = 587
    SMTP_USERNAME: str = ""
    SMTP_PASSWORD: str = ""
    SMTP_USE_TLS: bool = True
    MAIL_FROM: str = ""
    CONTACT_INBOX: str = ""
    FRONTEND_URL: str = "http://localhost:3000"
    SITE_NAME: str = "Portfolio"

    RATE_LIMIT: str = "60/minute"
    RATE_LIMIT_ENABLED: bool = True
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: list[str] = ["*"]

    @property
    def SQLALCHEMY_DATABASE_URI(self):
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"mysql+pymysql://{self.DB_USER}:{self.DB_PASSWORD}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        )

    @property
    def mail_sender(self) -> str:
        return self.MAIL_FROM or self.SMTP_USERNAME

    class Config:
        env_file = ".env"

settings = Settings()
