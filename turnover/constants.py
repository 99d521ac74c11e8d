"""All magic values live here — no inline literals anywhere else."""

# Remote vision endpoint
DEFAULT_API_BASE_URL = "https://api.openai.com/v1"
CHAT_COMPLETIONS_PATH = "/chat/completions"
DEFAULT_VISION_MODEL = "gpt-4o-mini"
ANALYSIS_MAX_TOKENS = 500
ANALYSIS_TEMPERATURE = 0.7
IMAGE_DATA_URI_PREFIX = "data:image/jpeg;base64,"

# Retry policy. Timeout is per attempt, not per analyze() call.
DEFAULT_TIMEOUT_SECONDS: float = 10.0
DEFAULT_MAX_ATTEMPTS = 2
DEFAULT_RETRY_DELAY_SECONDS: float = 2.0

# Credential persistence
DEFAULT_CREDENTIAL_PATH = ".turnover_credential.json"
CREDENTIAL_KEY = "api_key"

ITEM_CATEGORIES = (
    "Furniture",
    "Electronics",
    "Clothing",
    "Books",
    "Home & Garden",
    "Toys & Games",
    "Sports & Outdoors",
    "Tools",
    "Other",
)

ANALYSIS_PROMPT = (
    "Analyze this item and return ONLY valid JSON in this exact format:\n"
    "{\n"
    '  "name": "brief item name (max 50 chars)",\n'
    '  "category": "one of: ' + ", ".join(ITEM_CATEGORIES) + '",\n'
    '  "condition": "one of: new, likeNew, excellent, good, fair, poor",\n'
    '  "estimatedValue": 25.00,\n'
    '  "confidenceScore": 0.85,\n'
    '  "description": "detailed description for marketplace listings (100-200 words)",\n'
    '  "insights": "brief analysis of value and condition (50 words max)"\n'
    "}\n"
    "Use realistic resale values (not retail). Be conservative with estimates."
)

# Parser defaults for optional fields
DEFAULT_ESTIMATED_VALUE: float = 0.0
DEFAULT_CONFIDENCE_SCORE: float = 0.5

# Offline analysis result (emulator / demo runs)
MOCK_NAME = "Vintage Chair"
MOCK_CATEGORY = "Furniture"
MOCK_ESTIMATED_VALUE: float = 45.0
MOCK_CONFIDENCE_SCORE: float = 0.75
MOCK_DESCRIPTION = (
    "Classic wooden chair with minor wear. Sturdy construction. "
    "Good for dining or accent piece."
)
MOCK_INSIGHTS = (
    "Comparable items sell for $40-60. Condition affects value. "
    "Local pickup recommended."
)

# Log messages
MSG_ANALYSIS_ATTEMPT = "Analysis attempt %d/%d"
MSG_ANALYSIS_ATTEMPT_FAILED = "Analysis attempt %d/%d failed: %s"
MSG_ANALYSIS_RETRYING = "Retrying analysis in %.1fs"
MSG_ANALYSIS_DONE = "✓ Analyzed %r (%.1fs)"
MSG_ANALYSIS_GAVE_UP = "✗ Analysis failed after %d attempt(s): %s"
MSG_MOCK_ANALYSIS = "Using offline analysis result"

# User-facing error messages
MSG_ERR_CREDENTIAL_MISSING = "API key not configured. Please add your OpenAI API key in Settings."
MSG_ERR_INVALID_URL = "Invalid API URL."
MSG_ERR_INVALID_RESPONSE = "Invalid response from server."
MSG_ERR_INVALID_CREDENTIAL = "Invalid API key. Please check your settings."
MSG_ERR_RATE_LIMITED = "Rate limit exceeded. Please try again in a moment."
MSG_ERR_SERVER_ERROR = "API error: %s"
MSG_ERR_INVALID_RESPONSE_FORMAT = "Invalid AI response format."
MSG_ERR_INCOMPLETE_RESPONSE = "Incomplete AI response."
MSG_ERR_NETWORK = "Network error. Please check your internet connection."
MSG_ERR_UNKNOWN = "An unknown error occurred."

# CLI
MSG_HINT_SETTINGS = "Check your settings, then run the analysis again."
MSG_HINT_RETRY = "Please try again."
MSG_KEY_SAVED = "API key saved to %s"
MSG_KEY_CLEARED = "API key removed from %s"
MSG_PHOTO_NOT_FOUND = "Photo not found: %s"
