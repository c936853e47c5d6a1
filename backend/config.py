from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # LINE Messaging API
    LINE_CHANNEL_ACCESS_TOKEN: str = ""
    LINE_CHANNEL_SECRET: str = ""

    # OpenAI
    OPENAI_API_KEY: str = ""
    OPENAI_MODEL: str = "gpt-4o-mini"
    OPENAI_TEMPERATURE: float = 0.7

    # ユーザーストア設定
    USER_STORE_BACKEND: str = "memory"  # "memory" | "dynamodb"
    DYNAMODB_TABLE: str = "camp-guide-users"
    AWS_REGION: str = "ap-northeast-1"

    LOG_LEVEL: str = "INFO"
    GENERATION_TIMING_ENABLED: bool = True

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8080

    class Config:
        env_file = ".env"
        extra = "ignore"

settings = Settings()
