"""Address quality scoring.

A cheap pre-flight estimate of how likely an address string is to geocode:
looks for a postal code and the usual region/settlement/street/house markers
and combines them into a score between 0 and 1.
"""

from __future__ import annotations

import re

from ru_address_geocoder.models import AddressQuality, QualityAssessment

FEATURE_PATTERNS: dict[str, re.Pattern[str]] = {
    "postal_code": re.compile(r"\b\d{6}\b"),
    "region": re.compile(
        r"(?:^|\s)([А-ЯЁ][а-яё]+\s*(?:край|область|обл\.?|Республика|Респ\.?|АО))",
        re.IGNORECASE,
    ),
    "city": re.compile(
        r"(?:г\.|город|с\.|село|пгт|рп|посёлок|поселок)\s*([А-ЯЁ][а-яё]+(?:-[А-ЯЁ][а-яё]+)?)",
        re.IGNORECASE,
    ),
    "street": re.compile(
        r"(?:ул\.|улица|пр\.|проспект|пр-кт|б-р|бульвар|пер\.|переулок|ш\.|шоссе)"
        r"\s*([^,\d]+?)(?=,|\d|$)",
        re.IGNORECASE,
    ),
    "house": re.compile(
        r"(?:дом|д\.|№|корпус|корп\.|к\.|строение|стр\.|литер|лит\.)\s*([\w/\\-]+)",
        re.IGNORECASE,
    ),
}

FEATURE_WEIGHTS: dict[str, float] = {
    "postal_code": 0.3,
    "region": 0.2,
    "city": 0.25,
    "street": 0.25,
    "house": 0.2,
}

COMMA_WEIGHT = 0.05
COMMA_BONUS_CAP = 0.15
LONG_ADDRESS_BONUS = 0.1
FEW_WORDS_PENALTY = 0.2
SHORT_ADDRESS_PENALTY = 0.3

# (exclusive lower bound, grade), checked top to bottom
QUALITY_THRESHOLDS: tuple[tuple[float, AddressQuality], ...] = (
    (0.75, AddressQuality.EXCELLENT),
    (0.55, AddressQuality.GOOD),
    (0.35, AddressQuality.MEDIUM),
)


class AddressQualityScorer:
    """Scores raw address strings by the components they appear to contain."""

    def extract_features(self, address: str) -> dict[str, int]:
        features = {
            "length": len(address),
            "word_count": len(re.split(r"\s+", address)),
            "comma_count": address.count(","),
        }
        for name, pattern in FEATURE_PATTERNS.items():
            features[name] = 1 if pattern.search(address) else 0
        return features

    def calculate_score(self, features: dict[str, int]) -> float:
        score = sum(w for name, w in FEATURE_WEIGHTS.items() if features.get(name))
        score += min(features["comma_count"] * COMMA_WEIGHT, COMMA_BONUS_CAP)

        if features["length"] > 20:
            score += LONG_ADDRESS_BONUS
        if features["word_count"] < 3:
            score -= FEW_WORDS_PENALTY
        if features["length"] < 10:
            score -= SHORT_ADDRESS_PENALTY

        return max(0.0, min(1.0, score))

    def assess(self, address: str) -> QualityAssessment:
        """Score *address* and grade it."""
        features = self.extract_features(address)
        score = round(self.calculate_score(features), 3)

        quality = AddressQuality.POOR
        for threshold, grade in QUALITY_THRESHOLDS:
            if score > threshold:
                quality = grade
                break

        return QualityAssessment(score=score, quality=quality, features=features)
