from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "todo-api"
    environment: str = "local"
    debug: bool = True
    log_level: str = "INFO"

    mongo_uri_override: str | None = Field(default=None, alias="MONGODB_URI")
    mongo_scheme: str = "mongodb+srv"
    mongo_port: int = 27017
    mongo_host: str = "localhost"
    mongo_db: str = "todo_api"
    mongo_password: str | None = None
    mongo_params: str | None = None
    mongo_user: str | None = None

    jwt_algorithm: str = "HS256"
    jwt_secret_key: str = "abc123"
    session_token_expires_minutes: int | None = None
    bcrypt_rounds: int = 10

    model_config = SettingsConfigDict(env_file=(".env",), case_sensitive=True, populate_by_name=True)

    @property
    def mongo_uri(self) -> str:
        if self.mongo_uri_override:
            return self.mongo_uri_override
        auth = ""
        if self.mongo_user and self.mongo_password:
            auth = f"{self.mongo_user}:{self.mongo_password}@"
        # srv records carry no port
        host = self.mongo_host if self.mongo_scheme == "mongodb+srv" else f"{self.mongo_host}:{self.mongo_port}"
        params = f"?{self.mongo_params}" if self.mongo_params else "?retryWrites=true&w=majority"
        return f"{self.mongo_scheme}://{auth}{host}/{self.mongo_db}{params}"


settings = Settings()
