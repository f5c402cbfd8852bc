from pydantic_settings import BaseSettings


class Config(BaseSettings):
    """Application configuration loaded from environment variables."""

    database_url: str
    host: str = "0.0.0.0"  # noqa: S104
    port: int = 8000
    debug: bool = False
    cors_origins: list[str] = []
    forwarded_allow_ips: str = "127.0.0.1"  # Proxies trusted for X-Forwarded-* headers, comma separated or "*"
    forms_path: str  # Directory where rendered application forms are written
    cadet_form_template: str | None = None  # Background image for cadet forms (optional)
    poomsae_form_template: str | None = None  # Background image for poomsae forms (optional)
    render_timeout: float = 30.0  # Seconds before a form render is treated as failed
    max_submit_attempts: int = 3  # Entry ID allocations per submission before giving up

    model_config = {
        "env_file": [".env"],
        "env_prefix": "ENTRYDESK_",
        "extra": "ignore",
    }
