from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    gitlab_host: str = ""
    gitlab_token: str = ""
    gitlab_api_version: str = "v4"
    gitlab_timeout: float = 30.0
    log_format: str = "text"
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
