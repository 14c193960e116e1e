import math
import pytest

from posture_engine.common.enums import PoseLandmark as P
from posture_engine.common.models import Landmark, LandmarkFrame

# Upright seated subject seen from the front: head over shoulders over hips,
# left elbow and knee bent at 90 degrees.
UPRIGHT = {
    P.NOSE: (0.50, 0.22),
    P.LEFT_EAR: (0.45, 0.20),
    P.RIGHT_EAR: (0.55, 0.20),
    P.LEFT_SHOULDER: (0.40, 0.40),
    P.RIGHT_SHOULDER: (0.60, 0.40),
    P.LEFT_ELBOW: (0.40, 0.55),
    P.LEFT_WRIST: (0.55, 0.55),
    P.LEFT_HIP: (0.40, 0.70),
    P.RIGHT_HIP: (0.60, 0.70),
    P.LEFT_KNEE: (0.55, 0.70),
    P.LEFT_ANKLE: (0.55, 0.90),
}

def build_landmarks(points=None, visibility=None, default_visibility=1.0):
    """33 landmarks from an {index: (x, y)} map; unspecified points sit at the centre."""
    points = {**UPRIGHT, **(points or {})}
    visibility = visibility or {}
    landmarks = []
    for idx in P:
        x, y = points.get(idx, (0.5, 0.5))
        landmarks.append(Landmark(x=x, y=y, z=0.0, visibility=visibility.get(idx, default_visibility)))
    return landmarks

def build_frame(points=None, visibility=None, default_visibility=1.0, frame_id=0, timestamp=0.0):
    return LandmarkFrame(
        frame_id=frame_id,
        timestamp=timestamp,
        landmarks=build_landmarks(points, visibility, default_visibility),
    )

def hips_with_pelvic_tilt(degrees, left_hip=(0.40, 0.70), width=0.2):
    """Hip positions whose angle at the left hip, between the origin and the right hip, is `degrees`."""
    lx, ly = left_hip
    base = math.atan2(-ly, -lx)
    theta = base + math.radians(degrees)
    right_hip = (lx + width * math.cos(theta), ly + width * math.sin(theta))
    return {P.LEFT_HIP: left_hip, P.RIGHT_HIP: right_hip}

@pytest.fixture
def upright_landmarks():
    return build_landmarks()

@pytest.fixture
def upright_frame():
    return build_frame()
