# seated_posture_engine/posture_engine/analysis/posture_assessment.py
from typing import Sequence, Tuple
from ..common.enums import PoseLandmark as P, PostureStatus, Severity
from ..common.models import Landmark, PostureAnalysis, PostureMetrics
from ..geometry.kernel import distance, is_visible, all_visible
from ..geometry.body import head_center, head_neck_angle, hip_midpoint, shoulder_midpoint, trunk_angle

MIN_CONFIDENCE = 0.6
GOOD_TRUNK_MAX = 15.0
SLOUCH_TRUNK_MIN = 25.0
HIGH_SEVERITY_TRUNK = 35.0

INSUFFICIENT_VISIBILITY_MESSAGE = "Insufficient pose visibility for analysis"

def frame_confidence(landmarks: Sequence[Landmark]) -> float:
    """Fraction of shoulders, hips and nose that are visible."""
    key = [landmarks[i] for i in (P.LEFT_SHOULDER, P.RIGHT_SHOULDER, P.LEFT_HIP, P.RIGHT_HIP, P.NOSE)]
    return sum(1 for lm in key if is_visible(lm)) / len(key)

def classify_trunk_flexion(trunk_flexion: float, spine_visible: bool) -> Tuple[PostureStatus, Severity, str]:
    """First matching rule wins."""
    if not spine_visible:
        return PostureStatus.BORDERLINE, Severity.LOW, "Spine not in view"
    if trunk_flexion <= GOOD_TRUNK_MAX:
        return PostureStatus.GOOD, Severity.LOW, "Good posture!"
    if trunk_flexion > SLOUCH_TRUNK_MIN:
        severity = Severity.HIGH if trunk_flexion > HIGH_SEVERITY_TRUNK else Severity.MEDIUM
        return PostureStatus.SLOUCHING, severity, f"Slouching detected ({trunk_flexion:.1f}° trunk flexion)"
    return PostureStatus.BORDERLINE, Severity.LOW, "Posture needs improvement"

def insufficient_visibility(confidence: float) -> PostureAnalysis:
    return PostureAnalysis(
        status=PostureStatus.BORDERLINE,
        metrics=PostureMetrics(
            head_neck_angle=0.0,
            trunk_flexion=0.0,
            shoulder_width=0.0,
            confidence=confidence,
            spine_visible=False,
        ),
        severity=Severity.LOW,
        message=INSUFFICIENT_VISIBILITY_MESSAGE,
    )

def analyze_posture(landmarks: Sequence[Landmark]) -> PostureAnalysis:
    """Coarse good/slouching/borderline assessment from the current frame's raw geometry."""
    confidence = frame_confidence(landmarks)
    if confidence < MIN_CONFIDENCE:
        return insufficient_visibility(confidence)

    shoulder_width = distance(landmarks[P.LEFT_SHOULDER], landmarks[P.RIGHT_SHOULDER])
    shoulder_mid = shoulder_midpoint(landmarks)
    hip_mid = hip_midpoint(landmarks)

    spine_visible = all_visible(
        landmarks[P.LEFT_SHOULDER], landmarks[P.RIGHT_SHOULDER],
        landmarks[P.LEFT_HIP], landmarks[P.RIGHT_HIP],
    )
    trunk_flexion = trunk_angle(shoulder_mid, hip_mid) if spine_visible else 0.0
    head_angle = head_neck_angle(shoulder_mid, head_center(landmarks))

    status, severity, message = classify_trunk_flexion(trunk_flexion, spine_visible)
    return PostureAnalysis(
        status=status,
        metrics=PostureMetrics(
            head_neck_angle=head_angle,
            trunk_flexion=trunk_flexion,
            shoulder_width=shoulder_width,
            confidence=confidence,
            spine_visible=spine_visible,
        ),
        severity=severity,
        message=message,
    )
