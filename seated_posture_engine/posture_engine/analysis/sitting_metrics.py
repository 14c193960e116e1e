# seated_posture_engine/posture_engine/analysis/sitting_metrics.py
import numpy as np
from typing import Optional, Sequence
from ..common.enums import PoseLandmark as P
from ..common.models import Baseline, Landmark, MetricValue, SittingMetrics
from ..geometry.kernel import angle_degrees, all_visible, midpoint
from ..geometry.body import (
    absolute_pelvic_tilt, head_neck_angle, hip_midpoint, shoulder_midpoint, trunk_angle,
)
from .classification import ergonomic_score, metric_level

SIGMA_VISIBLE = 0.1
SIGMA_HIDDEN = 1.0
SCORE_CONFIDENCE = 0.8
MIN_NECK_HISTORY = 10
PER_MINUTE = 60

def make_metric(name: str, value: float, visible: bool, confidence: float = 1.0) -> MetricValue:
    """Wraps a raw value; invisible metrics report value 0 and level NA."""
    value = float(value) if visible else 0.0
    return MetricValue(
        value=value,
        sigma=SIGMA_VISIBLE if visible else SIGMA_HIDDEN,
        level=metric_level(name, value, visible),
        visible=visible,
        confidence=confidence,
    )

def neck_variability(neck_history: Sequence[float]) -> float:
    """Sample standard deviation of the CVA history, scaled to degrees per minute."""
    if len(neck_history) < 2:
        return 0.0
    return float(np.std(np.asarray(neck_history, dtype=float), ddof=1)) * PER_MINUTE

def calculate_sitting_metrics(landmarks: Sequence[Landmark],
                              baseline: Optional[Baseline] = None,
                              neck_history: Sequence[float] = ()) -> SittingMetrics:
    """Computes the seated ergonomics table for one frame.

    `neck_history` is the caller-owned rolling buffer of recent CVA values; it is
    only read here. Metrics whose landmarks are not all visible come back with
    visible=False, value 0 and level NA.
    """
    left_shoulder, right_shoulder = landmarks[P.LEFT_SHOULDER], landmarks[P.RIGHT_SHOULDER]
    left_hip, right_hip = landmarks[P.LEFT_HIP], landmarks[P.RIGHT_HIP]
    left_ear, right_ear = landmarks[P.LEFT_EAR], landmarks[P.RIGHT_EAR]
    left_elbow, left_wrist = landmarks[P.LEFT_ELBOW], landmarks[P.LEFT_WRIST]
    left_knee, left_ankle = landmarks[P.LEFT_KNEE], landmarks[P.LEFT_ANKLE]

    shoulder_mid = shoulder_midpoint(landmarks)
    hip_mid = hip_midpoint(landmarks)

    # --- Head ---
    cva_visible = all_visible(left_ear, right_ear, left_shoulder, right_shoulder)
    cva = head_neck_angle(shoulder_mid, midpoint(left_ear, right_ear)) if cva_visible else 0.0

    # --- Trunk and pelvis share the shoulder/hip gate ---
    trunk_visible = all_visible(left_shoulder, right_shoulder, left_hip, right_hip)
    trunk = trunk_angle(shoulder_mid, hip_mid) if trunk_visible else 0.0

    pelvic_visible = trunk_visible
    pelvic_tilt = absolute_pelvic_tilt(landmarks) if pelvic_visible else 0.0
    pelvic_delta = pelvic_tilt - baseline.pelvic_tilt if baseline is not None else 0.0

    # --- Limbs (left side only) ---
    elbow_visible = all_visible(left_shoulder, left_elbow, left_wrist)
    elbow = angle_degrees(left_shoulder, left_elbow, left_wrist) if elbow_visible else 0.0

    knee_visible = all_visible(left_hip, left_knee, left_ankle)
    knee = angle_degrees(left_hip, left_knee, left_ankle) if knee_visible else 0.0

    neck_var_visible = len(neck_history) > MIN_NECK_HISTORY
    neck_var = neck_variability(neck_history) if neck_var_visible else 0.0

    score = ergonomic_score(
        cva, cva_visible,
        trunk, trunk_visible,
        pelvic_delta, pelvic_visible,
        elbow, elbow_visible,
        knee, knee_visible,
    )

    return SittingMetrics(
        cva_deg=make_metric("cva_deg", cva, cva_visible),
        trunk_deg=make_metric("trunk_deg", trunk, trunk_visible),
        pelvic_tilt_deg_delta=make_metric("pelvic_tilt_deg_delta", pelvic_delta, pelvic_visible),
        pelvic_tilt_deg=make_metric("pelvic_tilt_deg", pelvic_tilt, pelvic_visible),
        elbow_deg=make_metric("elbow_deg", elbow, elbow_visible),
        knee_deg=make_metric("knee_deg", knee, knee_visible),
        neck_var_deg_per_min=make_metric("neck_var_deg_per_min", neck_var, neck_var_visible),
        ergo_score=make_metric("ergo_score", score, True, confidence=SCORE_CONFIDENCE),
    )
