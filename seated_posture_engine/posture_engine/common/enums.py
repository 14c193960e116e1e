# seated_posture_engine/posture_engine/common/enums.py
from enum import Enum, IntEnum

class MonitorState(str, Enum):
    """Defines the operational state of the PostureMonitor."""
    INITIALIZING = "INITIALIZING"
    TRACKING = "TRACKING"
    LOW_CONFIDENCE = "LOW_CONFIDENCE"

class PostureStatus(str, Enum):
    GOOD = "good"
    SLOUCHING = "slouching"
    BORDERLINE = "borderline"

class Severity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

class MetricLevel(str, Enum):
    """Traffic-light band of a single metric; NA when the metric is not visible."""
    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"
    NA = "na"

class SmoothingKind(str, Enum):
    MOVING_AVERAGE = "moving_average"
    ONE_EURO = "one_euro"

class LogLevel(str, Enum):
    """Defines logging levels for structured logging."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"

class PoseLandmark(IntEnum):
    """Fixed 33-point body landmark enumeration; values are frame indices."""
    NOSE = 0
    LEFT_EYE_INNER = 1
    LEFT_EYE = 2
    LEFT_EYE_OUTER = 3
    RIGHT_EYE_INNER = 4
    RIGHT_EYE = 5
    RIGHT_EYE_OUTER = 6
    LEFT_EAR = 7
    RIGHT_EAR = 8
    MOUTH_LEFT = 9
    MOUTH_RIGHT = 10
    LEFT_SHOULDER = 11
    RIGHT_SHOULDER = 12
    LEFT_ELBOW = 13
    RIGHT_ELBOW = 14
    LEFT_WRIST = 15
    RIGHT_WRIST = 16
    LEFT_PINKY = 17
    RIGHT_PINKY = 18
    LEFT_INDEX = 19
    RIGHT_INDEX = 20
    LEFT_THUMB = 21
    RIGHT_THUMB = 22
    LEFT_HIP = 23
    RIGHT_HIP = 24
    LEFT_KNEE = 25
    RIGHT_KNEE = 26
    LEFT_ANKLE = 27
    RIGHT_ANKLE = 28
    LEFT_HEEL = 29
    RIGHT_HEEL = 30
    LEFT_FOOT_INDEX = 31
    RIGHT_FOOT_INDEX = 32

NUM_LANDMARKS = len(PoseLandmark)
