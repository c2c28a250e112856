from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from functools import lru_cache

class Settings(BaseSettings):
    SLACK_BOT_TOKEN: str = Field("", description="Slack Bot User OAuth Token used when the client gets none")
    SLACK_API_BASE_URL: str = Field("https://slack.com/api/", description="Base location of the Web API methods")
    SLACK_HTTP_TIMEOUT: float = Field(30.0, description="Timeout in seconds for every HTTP call")
    SLACK_USER_AGENT: str = "slack-rpc/0.1 (python httpx)"
    SLACK_LOGIN_AGENT: str = Field("slack_rpc", description="Agent name sent with rtm.connect")
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

@lru_cache()
def get_settings() -> Settings:
    return Settings()
