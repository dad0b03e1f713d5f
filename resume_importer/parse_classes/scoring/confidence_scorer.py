"""confidence_scorer.py
Holds the pluggable ConfidenceScorer used by ContentMapper, ResumeValidator and
ResumeParserFramework to turn partial confidences into one score.
"""
from abc import ABC, abstractmethod
from typing import Dict, Iterable, Optional, Tuple

from resume_importer.config import SCANNER_DEFAULTS


def clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return max(low, min(high, value))


class ConfidenceScorer(ABC):
    """
    Abstract base class for confidence formulas.

    A scorer answers three questions:
        - `score_entries`: how confident is the mapping, given (weight, confidence)
          pairs for headings, personal fields and section items?
        - `score_validation`: how confident is the validator, given completeness,
          share of recognized sections and content richness?
        - `combine`: what is the final confidence of a parse?

    Every returned value must lie in [0, 1].
    """

    @abstractmethod
    def score_entries(self, entries: Iterable[Tuple[float, float]]) -> float:
        pass

    @abstractmethod
    def score_validation(
        self,
        completeness: float,
        recognized_ratio: float,
        richness: float,
    ) -> float:
        pass

    @abstractmethod
    def combine(self, mapping_confidence: float, validation_confidence: float) -> float:
        pass


class WeightedConfidenceScorer(ConfidenceScorer):
    """
    Default scorer.

    - Mapping confidence is the weighted mean of each entry's confidence, where
      the weight is the content length the entry was built from.
    - Validation confidence is `0.5 * completeness + 0.3 * recognized_ratio +
      0.2 * richness`.
    - Final confidence is the weighted mean of the two (equal weights by default).

    Args:
        validation_weights (Dict[str, float] | None): Overrides for the
            completeness / recognized_sections / content_richness weights.
        mapping_weight (float): Share of mapping confidence in `combine`.
    """

    def __init__(
        self,
        validation_weights: Optional[Dict[str, float]] = None,
        mapping_weight: float = SCANNER_DEFAULTS.MAPPING_CONFIDENCE_WEIGHT,
    ):
        self.validation_weights = validation_weights or dict(SCANNER_DEFAULTS.VALIDATION_WEIGHTS)
        self.mapping_weight = clamp(mapping_weight)

    def score_entries(self, entries: Iterable[Tuple[float, float]]) -> float:
        total_weight = 0.0
        weighted_sum = 0.0
        for weight, confidence in entries:
            if weight <= 0:
                continue
            total_weight += weight
            weighted_sum += weight * clamp(confidence)
        if total_weight == 0:
            return 0.0
        return clamp(weighted_sum / total_weight)

    def score_validation(
        self,
        completeness: float,
        recognized_ratio: float,
        richness: float,
    ) -> float:
        weights = self.validation_weights
        return clamp(
            weights.get("completeness", 0.0) * clamp(completeness)
            + weights.get("recognized_sections", 0.0) * clamp(recognized_ratio)
            + weights.get("content_richness", 0.0) * clamp(richness)
        )

    def combine(self, mapping_confidence: float, validation_confidence: float) -> float:
        return clamp(
            self.mapping_weight * clamp(mapping_confidence)
            + (1.0 - self.mapping_weight) * clamp(validation_confidence)
        )
