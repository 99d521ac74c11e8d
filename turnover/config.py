from dataclasses import dataclass
from pathlib import Path
from typing import Optional
import os
from dotenv import load_dotenv

from turnover.constants import (
    DEFAULT_API_BASE_URL,
    DEFAULT_CREDENTIAL_PATH,
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_RETRY_DELAY_SECONDS,
    DEFAULT_TIMEOUT_SECONDS,
    DEFAULT_VISION_MODEL,
)

_TRUTHY = ("1", "true", "yes", "on")


def _flag(raw: str) -> bool:
    return raw.strip().lower() in _TRUTHY


@dataclass(frozen=True)
class Config:
    openai_api_key: Optional[str]
    api_base_url: str
    vision_model: str
    timeout: float
    max_attempts: int
    retry_delay: float
    retry_all_errors: bool
    credential_path: Path
    use_mock: bool
    log_level: str

    @classmethod
    def from_env(cls) -> "Config":
        load_dotenv()

        api_key = os.getenv("OPENAI_API_KEY") or None
        base_url = os.getenv("TURNOVER_API_BASE_URL", DEFAULT_API_BASE_URL)
        model = os.getenv("TURNOVER_MODEL", DEFAULT_VISION_MODEL)
        timeout = os.getenv("TURNOVER_TIMEOUT", str(DEFAULT_TIMEOUT_SECONDS))
        attempts = os.getenv("TURNOVER_MAX_ATTEMPTS", str(DEFAULT_MAX_ATTEMPTS))
        delay = os.getenv("TURNOVER_RETRY_DELAY", str(DEFAULT_RETRY_DELAY_SECONDS))
        retry_all = os.getenv("TURNOVER_RETRY_ALL_ERRORS", "true")
        credential_path = os.getenv("TURNOVER_CREDENTIAL_PATH", DEFAULT_CREDENTIAL_PATH)
        use_mock = os.getenv("TURNOVER_USE_MOCK", "false")
        log_level = os.getenv("LOG_LEVEL", "INFO")

        try:
            parsed = (float(timeout), int(attempts), float(delay))
        except ValueError as exc:
            raise ValueError(f"Invalid numeric setting in .env: {exc}") from exc

        return cls._validate(
            openai_api_key=api_key,
            api_base_url=base_url.strip(),
            vision_model=model.strip(),
            timeout=parsed[0],
            max_attempts=parsed[1],
            retry_delay=parsed[2],
            retry_all_errors=_flag(retry_all),
            credential_path=Path(credential_path),
            use_mock=_flag(use_mock),
            log_level=log_level,
        )

    @staticmethod
    def _validate(
        openai_api_key: Optional[str],
        api_base_url: str,
        vision_model: str,
        timeout: float,
        max_attempts: int,
        retry_delay: float,
        retry_all_errors: bool,
        credential_path: Path,
        use_mock: bool,
        log_level: str,
    ) -> "Config":
        match vision_model:
            case "":
                raise ValueError("TURNOVER_MODEL must not be empty")
            case _:
                pass

        match timeout:
            case t if t <= 0:
                raise ValueError("TURNOVER_TIMEOUT must be greater than zero")
            case _:
                pass

        match max_attempts:
            case n if n < 1:
                raise ValueError("TURNOVER_MAX_ATTEMPTS must be at least 1")
            case _:
                pass

        match retry_delay:
            case d if d < 0:
                raise ValueError("TURNOVER_RETRY_DELAY must not be negative")
            case _:
                pass

        return Config(
            openai_api_key=openai_api_key,
            api_base_url=api_base_url,
            vision_model=vision_model,
            timeout=timeout,
            max_attempts=max_attempts,
            retry_delay=retry_delay,
            retry_all_errors=retry_all_errors,
            credential_path=credential_path,
            use_mock=use_mock,
            log_level=log_level,
        )
