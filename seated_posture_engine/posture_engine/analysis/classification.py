# seated_posture_engine/posture_engine/analysis/classification.py
"""Per-metric banding rules and the weighted ergonomic score.

Bands are closed intervals checked in order green, yellow; anything else is red.
Elbow, knee and pelvic tilt have an interior green band with yellow shoulders
on both sides, so they get dedicated two-sided classifiers.
"""
from typing import Callable, Dict, Tuple
from ..common.enums import MetricLevel

Band = Tuple[float, float]
Bands = Dict[str, Band]

CVA_BANDS: Bands = {"green": (50, 180), "yellow": (40, 50), "red": (0, 40)}
TRUNK_BANDS: Bands = {"green": (0, 20), "yellow": (20, 30), "red": (30, 180)}
NECK_VARIABILITY_BANDS: Bands = {"green": (0, 6), "yellow": (6, 10), "red": (10, 180)}
ERGO_SCORE_BANDS: Bands = {"green": (50, 100), "yellow": (40, 50), "red": (0, 40)}

SCORE_WEIGHTS = {"head": 0.25, "trunk": 0.25, "pelvis": 0.15, "upper_limb": 0.20, "lower_body": 0.15}

def classify(value: float, bands: Bands) -> MetricLevel:
    lo, hi = bands["green"]
    if lo <= value <= hi:
        return MetricLevel.GREEN
    lo, hi = bands["yellow"]
    if lo <= value <= hi:
        return MetricLevel.YELLOW
    return MetricLevel.RED

def classify_elbow(value: float) -> MetricLevel:
    if 90 <= value <= 110:
        return MetricLevel.GREEN
    if 75 <= value < 90 or 110 < value <= 125:
        return MetricLevel.YELLOW
    return MetricLevel.RED

def classify_knee(value: float) -> MetricLevel:
    if 80 <= value <= 110:
        return MetricLevel.GREEN
    if 70 <= value < 80 or 110 < value <= 120:
        return MetricLevel.YELLOW
    return MetricLevel.RED

def classify_pelvic_tilt(value: float) -> MetricLevel:
    magnitude = abs(value)
    if magnitude <= 10:
        return MetricLevel.GREEN
    if magnitude <= 20:
        return MetricLevel.YELLOW
    return MetricLevel.RED

# SittingMetrics field name -> banding rule
METRIC_CLASSIFIERS: Dict[str, Callable[[float], MetricLevel]] = {
    "cva_deg": lambda v: classify(v, CVA_BANDS),
    "trunk_deg": lambda v: classify(v, TRUNK_BANDS),
    "pelvic_tilt_deg_delta": classify_pelvic_tilt,
    "pelvic_tilt_deg": classify_pelvic_tilt,
    "elbow_deg": classify_elbow,
    "knee_deg": classify_knee,
    "neck_var_deg_per_min": lambda v: classify(v, NECK_VARIABILITY_BANDS),
    "ergo_score": lambda v: classify(v, ERGO_SCORE_BANDS),
}

def metric_level(name: str, value: float, visible: bool) -> MetricLevel:
    if not visible:
        return MetricLevel.NA
    return METRIC_CLASSIFIERS[name](value)

# --- Ergonomic score sub-scores: 1.0 good, 0.7 acceptable, 0.4 poor ---

def _sub_score(level: MetricLevel) -> float:
    return {MetricLevel.GREEN: 1.0, MetricLevel.YELLOW: 0.7, MetricLevel.RED: 0.4}.get(level, 0.0)

def ergonomic_score(cva: float, cva_visible: bool,
                    trunk: float, trunk_visible: bool,
                    pelvic_delta: float, pelvic_visible: bool,
                    elbow: float, elbow_visible: bool,
                    knee: float, knee_visible: bool) -> float:
    """Weighted 0-100 composite; an invisible joint contributes 0."""
    scores = {
        "head": _sub_score(metric_level("cva_deg", cva, cva_visible)),
        "trunk": _sub_score(metric_level("trunk_deg", trunk, trunk_visible)),
        "pelvis": _sub_score(metric_level("pelvic_tilt_deg_delta", pelvic_delta, pelvic_visible)),
        "upper_limb": _sub_score(metric_level("elbow_deg", elbow, elbow_visible)),
        "lower_body": _sub_score(metric_level("knee_deg", knee, knee_visible)),
    }
    total = sum(scores[part] * weight for part, weight in SCORE_WEIGHTS.items()) * 100
    return min(max(total, 0.0), 100.0)
