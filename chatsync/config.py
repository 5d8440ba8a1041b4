from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Chat server websocket endpoint; the display name is appended as ?name=
    SERVER_URL: str = "ws://localhost:8080/ws"
    DISPLAY_NAME: str = ""
    LOG_LEVEL: str = "INFO"

    # Keepalive, matched to the server's 60 s pong wait
    PING_INTERVAL: float = 54.0
    PING_TIMEOUT: float = 60.0

    # Largest inbound frame accepted, in bytes
    MAX_FRAME_SIZE: int = 1_048_576

    model_config = {"env_file": ".env"}


settings = Settings()
