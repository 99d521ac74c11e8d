import json
import logging
from pathlib import Path

from turnover.constants import CREDENTIAL_KEY, DEFAULT_CREDENTIAL_PATH

logger = logging.getLogger(__name__)


class CredentialStore:
    """Persists the API credential as a one-key JSON file."""

    def __init__(self, path: Path = Path(DEFAULT_CREDENTIAL_PATH)):
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> str | None:
        match self._path.exists():
            case True:
                try:
                    with open(self._path) as f:
                        raw = json.load(f)
                except (OSError, json.JSONDecodeError) as e:
                    logger.warning("Credential load failed: %s, starting empty", e)
                    return None
                value = raw.get(CREDENTIAL_KEY) if isinstance(raw, dict) else None
                return value if isinstance(value, str) and value else None
            case False:
                return None

    def save(self, value: str) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        with open(self._path, "w") as f:
            json.dump({CREDENTIAL_KEY: value}, f, indent=2)
        self._path.chmod(0o600)

    def clear(self) -> None:
        self._path.unlink(missing_ok=True)
