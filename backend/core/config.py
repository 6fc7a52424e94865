import json
import os
import pathlib
from dataclasses import dataclass, field


DEFAULT_BASE_URL = "https://open.larksuite.com"


def _env(*names: str) -> str | None:
    """Return the first non-empty environment variable among names."""
    for name in names:
        value = os.environ.get(name)
        if value:
            return value
    return None


@dataclass
class LarkConfig:
    app_id: str = ""
    app_secret: str = ""
    base_url: str = DEFAULT_BASE_URL

    @property
    def open_api_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/open-apis"


@dataclass
class AppConfig:
    lark: LarkConfig = field(default_factory=LarkConfig)
    auth_token: str = ""
    log_level: str = "INFO"
    # Path the config was read from, None when no file was found.
    source: str | None = field(default=None, compare=False)

    @staticmethod
    def config_path() -> str:
        return os.environ.get("CONFIG_FILE", "/run/secrets/config.json")

    @classmethod
    def load(cls) -> "AppConfig":
        path = pathlib.Path(cls.config_path())

        data: dict = {}
        source = None
        if path.exists():
            with open(path) as f:
                data = json.load(f)
            source = str(path)

        config = cls(
            lark=LarkConfig(**data.get("lark", {})),
            auth_token=data.get("auth_token", ""),
            log_level=data.get("log_level", "INFO"),
            source=source,
        )
        config.apply_env()
        return config

    def apply_env(self) -> None:
        """Override file values with environment variables where set."""
        self.lark.app_id = _env("APP_ID", "LARK_APP_ID") or self.lark.app_id
        self.lark.app_secret = (
            _env("APP_SECRET", "LARK_APP_SECRET") or self.lark.app_secret
        )
        self.lark.base_url = _env("LARK_BASE_URL") or self.lark.base_url
        self.auth_token = _env("AUTH_TOKEN", "LARK_AUTH_TOKEN") or self.auth_token
        self.log_level = _env("LOG_LEVEL") or self.log_level
