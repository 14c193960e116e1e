# seated_posture_engine/posture_engine/geometry/body.py
from typing import Sequence
from ..common.enums import PoseLandmark
from ..common.models import Landmark
from .kernel import angle_degrees, midpoint, is_visible

# Image-space y grows downward, so "up" is y - 1.

def vertical_up(point: Landmark) -> Landmark:
    return point.model_copy(update={"y": point.y - 1})

def vertical_down(point: Landmark) -> Landmark:
    return point.model_copy(update={"y": point.y + 1})

def shoulder_midpoint(landmarks: Sequence[Landmark]) -> Landmark:
    return midpoint(landmarks[PoseLandmark.LEFT_SHOULDER], landmarks[PoseLandmark.RIGHT_SHOULDER])

def hip_midpoint(landmarks: Sequence[Landmark]) -> Landmark:
    return midpoint(landmarks[PoseLandmark.LEFT_HIP], landmarks[PoseLandmark.RIGHT_HIP])

def trunk_angle(shoulder_mid: Landmark, hip_mid: Landmark) -> float:
    """Forward lean of the torso from vertical, in degrees.

    Measured at the spine midpoint (halfway between shoulder and hip midpoints)
    between straight down and the hip midpoint. Both the sitting-metrics table
    and the frame-level assessment use this formulation.
    """
    spine_mid = midpoint(shoulder_mid, hip_mid)
    return angle_degrees(vertical_down(spine_mid), spine_mid, hip_mid)

def head_neck_angle(shoulder_mid: Landmark, head: Landmark) -> float:
    """Angle at the shoulder midpoint between straight up and the head point.

    0 means the head sits directly above the shoulders; it grows as the head
    moves forward or sideways.
    """
    return angle_degrees(vertical_up(shoulder_mid), shoulder_mid, head)

def head_center(landmarks: Sequence[Landmark]) -> Landmark:
    """Ear midpoint when both ears are visible, otherwise the nose."""
    left_ear = landmarks[PoseLandmark.LEFT_EAR]
    right_ear = landmarks[PoseLandmark.RIGHT_EAR]
    if is_visible(left_ear) and is_visible(right_ear):
        return midpoint(left_ear, right_ear)
    return landmarks[PoseLandmark.NOSE]

def absolute_pelvic_tilt(landmarks: Sequence[Landmark]) -> float:
    # Measured against the coordinate origin rather than a body-relative
    # horizontal, so the value depends on how the upstream frame is normalized.
    # Kept as-is for compatibility with stored baselines.
    origin = Landmark(x=0.0, y=0.0, z=0.0)
    return angle_degrees(origin, landmarks[PoseLandmark.LEFT_HIP], landmarks[PoseLandmark.RIGHT_HIP])
