# seated_posture_engine/posture_engine/geometry/kernel.py
import numpy as np
from ..common.models import Landmark

VISIBILITY_THRESHOLD = 0.3

def angle_degrees(a: Landmark, b: Landmark, c: Landmark) -> float:
    """Angle at vertex b between rays b->a and b->c, in degrees [0, 180].

    Planar (x, y) only; z is ignored. A zero-length ray yields 0.0.
    """
    v1 = np.array([a.x - b.x, a.y - b.y])
    v2 = np.array([c.x - b.x, c.y - b.y])

    mag1 = np.hypot(v1[0], v1[1])
    mag2 = np.hypot(v2[0], v2[1])
    if mag1 == 0 or mag2 == 0:
        return 0.0

    cos_angle = np.clip(np.dot(v1, v2) / (mag1 * mag2), -1.0, 1.0)
    return float(np.degrees(np.arccos(cos_angle)))

def distance(a: Landmark, b: Landmark) -> float:
    return float(np.hypot(a.x - b.x, a.y - b.y))

def midpoint(a: Landmark, b: Landmark) -> Landmark:
    # The weaker of the two confidences carries over.
    return Landmark(
        x=(a.x + b.x) / 2,
        y=(a.y + b.y) / 2,
        z=(a.z + b.z) / 2,
        visibility=min(a.visibility or 0.0, b.visibility or 0.0),
    )

def is_visible(landmark: Landmark, threshold: float = VISIBILITY_THRESHOLD) -> bool:
    return (landmark.visibility or 0.0) >= threshold

def all_visible(*landmarks: Landmark, threshold: float = VISIBILITY_THRESHOLD) -> bool:
    return all(is_visible(lm, threshold) for lm in landmarks)
