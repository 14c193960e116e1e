# seated_posture_engine/posture_engine/common/models.py
import numpy as np
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional, List, Dict, Iterable
from .enums import MetricLevel, MonitorState, PostureStatus, Severity, NUM_LANDMARKS

class Landmark(BaseModel):
    """A single tracked body point in normalized image space."""
    model_config = ConfigDict(frozen=True)

    x: float
    y: float
    z: float = 0.0
    visibility: Optional[float] = None
    presence: Optional[float] = None

class LandmarkFrame(BaseModel):
    """One frame of landmarks, index-aligned to PoseLandmark."""
    model_config = ConfigDict(frozen=True)

    frame_id: int
    timestamp: float
    landmarks: List[Landmark]

    @field_validator("landmarks")
    @classmethod
    def _check_count(cls, value: List[Landmark]) -> List[Landmark]:
        if len(value) != NUM_LANDMARKS:
            raise ValueError(f"expected {NUM_LANDMARKS} landmarks, got {len(value)}")
        return value

    @classmethod
    def from_array(cls, landmarks_np: np.ndarray, frame_id: int, timestamp: float) -> "LandmarkFrame":
        """Builds a frame from a (33, 3) or (33, 4) array of x, y, z[, visibility]."""
        arr = np.asarray(landmarks_np, dtype=float)
        if arr.ndim != 2 or arr.shape[0] != NUM_LANDMARKS or arr.shape[1] not in (3, 4):
            raise ValueError(f"expected landmark array of shape ({NUM_LANDMARKS}, 3|4), got {arr.shape}")

        landmarks = []
        for row in arr:
            visibility = float(row[3]) if arr.shape[1] == 4 else None
            landmarks.append(Landmark(x=row[0], y=row[1], z=row[2], visibility=visibility))
        return cls(frame_id=frame_id, timestamp=timestamp, landmarks=landmarks)

    @classmethod
    def from_landmark_list(cls, landmark_list: Iterable, frame_id: int, timestamp: float) -> "LandmarkFrame":
        """Builds a frame from any iterable of objects exposing x/y/z/visibility attributes
        (e.g. a pose model's normalized landmark list)."""
        landmarks = [
            Landmark(
                x=lm.x,
                y=lm.y,
                z=getattr(lm, "z", 0.0),
                visibility=getattr(lm, "visibility", None),
                presence=getattr(lm, "presence", None),
            )
            for lm in landmark_list
        ]
        return cls(frame_id=frame_id, timestamp=timestamp, landmarks=landmarks)

    def to_array(self) -> np.ndarray:
        return np.array([[lm.x, lm.y, lm.z, lm.visibility or 0.0] for lm in self.landmarks])

class Baseline(BaseModel):
    """Reference values captured by an explicit calibration action."""
    model_config = ConfigDict(frozen=True)

    pelvic_tilt: float
    shoulder_width: float

class MetricValue(BaseModel):
    model_config = ConfigDict(frozen=True)

    value: float
    sigma: float
    level: MetricLevel
    visible: bool
    confidence: float = 1.0

class SittingMetrics(BaseModel):
    """Fine-grained seated ergonomics table, one entry per metric."""
    model_config = ConfigDict(frozen=True)

    cva_deg: MetricValue
    trunk_deg: MetricValue
    pelvic_tilt_deg_delta: MetricValue
    pelvic_tilt_deg: MetricValue
    elbow_deg: MetricValue
    knee_deg: MetricValue
    neck_var_deg_per_min: MetricValue
    ergo_score: MetricValue

class PostureMetrics(BaseModel):
    model_config = ConfigDict(frozen=True)

    head_neck_angle: float
    trunk_flexion: float
    shoulder_width: float
    confidence: float
    spine_visible: bool
    sitting_metrics: Optional[SittingMetrics] = None

class PostureAnalysis(BaseModel):
    """Coarse frame-level posture assessment."""
    model_config = ConfigDict(frozen=True)

    status: PostureStatus
    metrics: PostureMetrics
    severity: Severity
    message: str

class MonitorResult(BaseModel):
    """Encapsulates the complete result of a single frame's posture monitoring."""
    model_config = ConfigDict(frozen=True)

    frame_id: int
    timestamp: float
    processing_time_ms: float
    state: MonitorState
    raw_analysis: PostureAnalysis
    analysis: PostureAnalysis
    sitting_metrics: SittingMetrics
    calibrated: bool = False
    performance_metrics: Dict[str, float] = Field(default_factory=dict)
