"""VisionClient — abstract base for item analysis backends."""
from abc import ABC, abstractmethod

from turnover.models import AnalysisResult


class VisionClient(ABC):
    @abstractmethod
    async def analyze(self, image_bytes: bytes) -> AnalysisResult:
        """Analyze JPEG image bytes and return a valuation. Raises AnalysisError on failure."""
        ...
