"""Item analysis data model."""
from dataclasses import dataclass
from enum import Enum


class ItemCondition(str, Enum):
    NEW = "new"
    LIKE_NEW = "likeNew"
    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"

    @property
    def display_name(self) -> str:
        match self:
            case ItemCondition.LIKE_NEW:
                return "Like New"
            case other:
                return other.value.capitalize()

    @classmethod
    def from_raw(cls, raw: str) -> "ItemCondition":
        """Map a model-supplied condition string, falling back to GOOD."""
        try:
            return cls(raw)
        except ValueError:
            return cls.GOOD


@dataclass(frozen=True)
class AnalysisResult:
    name: str
    category: str
    condition: ItemCondition
    estimated_value: float
    confidence_score: float
    description: str
    insights: str

    def as_dict(self) -> dict[str, str | float]:
        """Return the wire-shaped (camelCase) mapping of this result."""
        return {
            "name": self.name,
            "category": self.category,
            "condition": self.condition.value,
            "estimatedValue": self.estimated_value,
            "confidenceScore": self.confidence_score,
            "description": self.description,
            "insights": self.insights,
        }
