"""MockVisionClient — offline backend returning a canned valuation."""
import logging

from turnover.constants import (
    MOCK_CATEGORY,
    MOCK_CONFIDENCE_SCORE,
    MOCK_DESCRIPTION,
    MOCK_ESTIMATED_VALUE,
    MOCK_INSIGHTS,
    MOCK_NAME,
    MSG_MOCK_ANALYSIS,
)
from turnover.models import AnalysisResult, ItemCondition
from turnover.vision.client import VisionClient

logger = logging.getLogger(__name__)

MOCK_RESULT = AnalysisResult(
    name=MOCK_NAME,
    category=MOCK_CATEGORY,
    condition=ItemCondition.GOOD,
    estimated_value=MOCK_ESTIMATED_VALUE,
    confidence_score=MOCK_CONFIDENCE_SCORE,
    description=MOCK_DESCRIPTION,
    insights=MOCK_INSIGHTS,
)


class MockVisionClient(VisionClient):
    """No network, no credential, never fails."""

    async def analyze(self, image_bytes: bytes) -> AnalysisResult:
        logger.info(MSG_MOCK_ANALYSIS)
        return MOCK_RESULT
