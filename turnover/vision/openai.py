"""OpenAIVisionClient — item valuation over the OpenAI chat-completions API."""
import asyncio
import base64
import logging
import threading
import time
from typing import Any, Optional
from urllib.parse import urlsplit

from openai import (
    APIConnectionError,
    APIResponseValidationError,
    APIStatusError,
    AsyncOpenAI,
    OpenAIError,
)

from turnover.config import Config
from turnover.constants import (
    ANALYSIS_MAX_TOKENS,
    ANALYSIS_PROMPT,
    ANALYSIS_TEMPERATURE,
    CHAT_COMPLETIONS_PATH,
    DEFAULT_API_BASE_URL,
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_RETRY_DELAY_SECONDS,
    DEFAULT_TIMEOUT_SECONDS,
    DEFAULT_VISION_MODEL,
    IMAGE_DATA_URI_PREFIX,
    MSG_ANALYSIS_ATTEMPT,
    MSG_ANALYSIS_ATTEMPT_FAILED,
    MSG_ANALYSIS_DONE,
    MSG_ANALYSIS_GAVE_UP,
    MSG_ANALYSIS_RETRYING,
)
from turnover.credential_store import CredentialStore
from turnover.models import AnalysisResult
from turnover.vision.client import VisionClient
from turnover.vision.errors import AnalysisError, ErrorKind
from turnover.vision.mock import MOCK_RESULT
from turnover.vision.parser import parse_response

logger = logging.getLogger(__name__)


# ── pure helpers (module-level so tests can import them directly) ──────────────


def encode_image(image_bytes: bytes) -> str:
    """Return the data URI used as the image_url of the request."""
    return IMAGE_DATA_URI_PREFIX + base64.standard_b64encode(image_bytes).decode()


def build_messages(image_url: str) -> list[dict[str, Any]]:
    return [
        {
            "role": "user",
            "content": [
                {"type": "text", "text": ANALYSIS_PROMPT},
                {"type": "image_url", "image_url": {"url": image_url}},
            ],
        }
    ]


def is_valid_endpoint(url: str) -> bool:
    try:
        parts = urlsplit(url)
    except ValueError:
        return False
    return parts.scheme in ("http", "https") and bool(parts.netloc)


def classify_status(status_code: int) -> AnalysisError:
    match status_code:
        case 401:
            return AnalysisError(ErrorKind.INVALID_CREDENTIAL, status_code=401)
        case 429:
            return AnalysisError(ErrorKind.RATE_LIMITED, status_code=429)
        case code:
            return AnalysisError(ErrorKind.SERVER_ERROR, status_code=code)


def classify_sdk_error(exc: OpenAIError) -> AnalysisError:
    """Translate an SDK exception into the analysis error taxonomy."""
    match exc:
        case APIStatusError(status_code=code):
            return classify_status(code)
        case APIConnectionError():
            return AnalysisError(ErrorKind.NETWORK_ERROR)
        case APIResponseValidationError():
            return AnalysisError(ErrorKind.INVALID_RESPONSE)
        case _:
            return AnalysisError(ErrorKind.UNKNOWN)


# ── client ────────────────────────────────────────────────────────────────────


class OpenAIVisionClient(VisionClient):
    """Sends one photo per call and retries failed attempts with a fixed delay.

    The credential is held in memory and snapshotted at the start of each
    analyze() call. An optional CredentialStore backs load_credential() and
    save_credential(); set_credential() only touches the in-memory value.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        *,
        store: Optional[CredentialStore] = None,
        base_url: str = DEFAULT_API_BASE_URL,
        model: str = DEFAULT_VISION_MODEL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        retry_delay: float = DEFAULT_RETRY_DELAY_SECONDS,
        retry_all_errors: bool = True,
    ) -> None:
        match max_attempts:
            case n if n < 1:
                raise ValueError("max_attempts must be at least 1")
            case _:
                pass

        match retry_delay:
            case d if d < 0:
                raise ValueError("retry_delay must not be negative")
            case _:
                pass

        self._api_key = api_key
        self._lock = threading.Lock()
        self._store = store
        self._base_url = base_url.rstrip("/")
        self._model = model
        self._timeout = timeout
        self._max_attempts = max_attempts
        self._retry_delay = retry_delay
        self._retry_all_errors = retry_all_errors

    @classmethod
    def from_config(
        cls, config: Config, store: Optional[CredentialStore] = None
    ) -> "OpenAIVisionClient":
        return cls(
            config.openai_api_key,
            store=store,
            base_url=config.api_base_url,
            model=config.vision_model,
            timeout=config.timeout,
            max_attempts=config.max_attempts,
            retry_delay=config.retry_delay,
            retry_all_errors=config.retry_all_errors,
        )

    # ── credential ────────────────────────────────────────────────────────────

    def set_credential(self, value: str) -> None:
        with self._lock:
            self._api_key = value

    def get_credential(self) -> Optional[str]:
        with self._lock:
            return self._api_key

    def load_credential(self) -> Optional[str]:
        """Replace the in-memory credential with the stored one, if any."""
        match self._store:
            case None:
                return self.get_credential()
            case store:
                stored = store.load()
                if stored:
                    self.set_credential(stored)
                return self.get_credential()

    def save_credential(self, value: str) -> None:
        if self._store is not None:
            self._store.save(value)
        self.set_credential(value)

    # ── analysis ──────────────────────────────────────────────────────────────

    def mock_analysis(self) -> AnalysisResult:
        """Canned result for runs without network access."""
        return MOCK_RESULT

    async def analyze(self, image_bytes: bytes) -> AnalysisResult:
        api_key = self.get_credential()
        match api_key:
            case None | "":
                raise AnalysisError(ErrorKind.CREDENTIAL_MISSING)
            case _:
                pass

        image_url = encode_image(image_bytes)
        started = time.monotonic()
        last_error = AnalysisError(ErrorKind.UNKNOWN)
        attempt = 0
        for attempt in range(1, self._max_attempts + 1):
            logger.debug(MSG_ANALYSIS_ATTEMPT, attempt, self._max_attempts)
            try:
                result = await self._perform_analysis(api_key, image_url)
            except AnalysisError as exc:
                last_error = exc
                logger.warning(
                    MSG_ANALYSIS_ATTEMPT_FAILED, attempt, self._max_attempts, exc.kind.value
                )
                if attempt == self._max_attempts or not self._should_retry(exc):
                    break
                logger.info(MSG_ANALYSIS_RETRYING, self._retry_delay)
                await asyncio.sleep(self._retry_delay)
            else:
                logger.info(MSG_ANALYSIS_DONE, result.name, time.monotonic() - started)
                return result

        logger.error(MSG_ANALYSIS_GAVE_UP, attempt, last_error.kind.value)
        raise last_error

    def _should_retry(self, error: AnalysisError) -> bool:
        return self._retry_all_errors or error.kind.is_transient

    async def _perform_analysis(self, api_key: str, image_url: str) -> AnalysisResult:
        if not is_valid_endpoint(self._base_url + CHAT_COMPLETIONS_PATH):
            raise AnalysisError(ErrorKind.INVALID_URL)

        client = AsyncOpenAI(
            api_key=api_key,
            base_url=self._base_url,
            timeout=self._timeout,
            max_retries=0,
        )
        try:
            response = await client.chat.completions.with_raw_response.create(
                model=self._model,
                messages=build_messages(image_url),
                max_tokens=ANALYSIS_MAX_TOKENS,
                temperature=ANALYSIS_TEMPERATURE,
            )
        except OpenAIError as exc:
            raise classify_sdk_error(exc) from exc
        finally:
            await client.close()

        match response.status_code:
            case 200:
                return parse_response(response.text)
            case code:
                raise classify_status(code)
