"""
Scoring Data Model

Immutable input/output records for the scoring functions. The scorers accept
these records (or plain dicts with the same keys) and never validate them;
validation happens at the boundary through the ``from_dict`` constructors.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Optional


class SearchIntent(Enum):
    """Search intent classification."""
    INFORMATIONAL = "informational"
    TRANSACTIONAL = "transactional"
    COMMERCIAL = "commercial"
    NAVIGATIONAL = "navigational"


class LinkType(Enum):
    """Backlink rel type."""
    DOFOLLOW = "dofollow"
    NOFOLLOW = "nofollow"
    UGC = "ugc"
    SPONSORED = "sponsored"


class QualityTier(Enum):
    """Backlink quality tiers."""
    EXCELLENT = "excellent"  # score >= 80
    GOOD = "good"            # score >= 60
    FAIR = "fair"            # score >= 40
    POOR = "poor"            # score < 40


class InvalidMetricsError(ValueError):
    """Raised when boundary input cannot be turned into a scoring record."""

    def __init__(self, message: str, field_name: Optional[str] = None):
        super().__init__(message)
        self.field_name = field_name


def _number(data: Mapping[str, Any], key: str, default: Any = None) -> float:
    value = data.get(key, default)
    # bool is an int subclass, but never a valid metric
    if value is None or isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidMetricsError(f"{key} must be a number, got {value!r}", key)
    if math.isnan(value) or math.isinf(value):
        raise InvalidMetricsError(f"{key} must be finite, got {value!r}", key)
    return value


def _percentage(data: Mapping[str, Any], key: str) -> float:
    value = _number(data, key)
    if not 0 <= value <= 100:
        raise InvalidMetricsError(f"{key} must be within 0-100, got {value}", key)
    return value


@dataclass(frozen=True)
class KeywordMetrics:
    """Market signal snapshot for one keyword."""
    search_volume: int
    difficulty: float  # 0-100
    cpc: float
    current_position: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "KeywordMetrics":
        """
        Build validated metrics from loosely typed data.

        Args:
            data: Dict with search_volume, difficulty, cpc and optional
                current_position

        Returns:
            KeywordMetrics

        Raises:
            InvalidMetricsError: On missing, non-numeric or out-of-range values
        """
        search_volume = _number(data, "search_volume")
        if search_volume < 0:
            raise InvalidMetricsError(
                f"search_volume must be non-negative, got {search_volume}", "search_volume"
            )
        if search_volume != int(search_volume):
            raise InvalidMetricsError(
                f"search_volume must be a whole number, got {search_volume}", "search_volume"
            )

        cpc = _number(data, "cpc", 0.0)
        if cpc < 0:
            raise InvalidMetricsError(f"cpc must be non-negative, got {cpc}", "cpc")

        current_position = data.get("current_position")
        if current_position is not None:
            current_position = _number(data, "current_position")
            if current_position < 1 or current_position != int(current_position):
                raise InvalidMetricsError(
                    f"current_position must be a positive integer, got {current_position}",
                    "current_position",
                )
            current_position = int(current_position)

        return cls(
            search_volume=int(search_volume),
            difficulty=_percentage(data, "difficulty"),
            cpc=cpc,
            current_position=current_position,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "search_volume": self.search_volume,
            "difficulty": self.difficulty,
            "cpc": self.cpc,
            "current_position": self.current_position,
        }


@dataclass(frozen=True)
class BacklinkSignal:
    """Quality signals for a single backlink."""
    domain_rating: float       # 0-100
    link_type: str             # dofollow / nofollow / ugc / sponsored
    anchor_relevance: float    # 0-100
    context_relevance: float   # 0-100

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "BacklinkSignal":
        """
        Build a validated signal from loosely typed data.

        Raises:
            InvalidMetricsError: On unknown link types or out-of-range values
        """
        link_type = data.get("link_type")
        if isinstance(link_type, LinkType):
            link_type = link_type.value
        valid_types = {t.value for t in LinkType}
        if not isinstance(link_type, str) or link_type.lower() not in valid_types:
            raise InvalidMetricsError(
                f"link_type must be one of {sorted(valid_types)}, got {link_type!r}",
                "link_type",
            )

        return cls(
            domain_rating=_percentage(data, "domain_rating"),
            link_type=link_type.lower(),
            anchor_relevance=_percentage(data, "anchor_relevance"),
            context_relevance=_percentage(data, "context_relevance"),
        )


@dataclass(frozen=True)
class BacklinkQuality:
    """Scored backlink."""
    score: int
    tier: QualityTier

    @property
    def quality(self) -> str:
        """Tier label, as exposed to callers of the quality check."""
        return self.tier.value

    def to_dict(self) -> Dict[str, Any]:
        return {"score": self.score, "quality": self.tier.value}
