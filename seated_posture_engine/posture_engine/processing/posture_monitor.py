# seated_posture_engine/posture_engine/processing/posture_monitor.py
import logging
import time
from collections import deque
from typing import Optional
from ..common.enums import MonitorState, PoseLandmark as P, SmoothingKind
from ..common.models import Baseline, LandmarkFrame, MonitorResult, PostureAnalysis
from ..geometry.kernel import all_visible, distance
from ..geometry.body import absolute_pelvic_tilt
from ..analysis.posture_assessment import (
    MIN_CONFIDENCE, analyze_posture, classify_trunk_flexion, insufficient_visibility,
)
from ..analysis.sitting_metrics import calculate_sitting_metrics, make_metric
from .one_euro_filter import OneEuroFilter
from .smoothing_filter import MovingAverageFilter

logger = logging.getLogger(__name__)

ANGLE_SIGNALS = ("head_neck_angle", "trunk_flexion", "knee", "elbow", "pelvic_tilt")

class PostureMonitor:
    """Owns one subject's filters, neck history and baseline, and runs the per-frame analysis."""

    def __init__(self, config: Optional[dict] = None):
        self.config = config or {}
        self.state = MonitorState.INITIALIZING

        self.smoothing = SmoothingKind(self.config.get('smoothing', SmoothingKind.MOVING_AVERAGE.value))
        self.neck_history = deque(maxlen=self.config.get('neck_history_size', 1800))
        self.emit_interval = self.config.get('emit_interval', 0.1)
        self.baseline: Optional[Baseline] = None

        self.filters = {name: self._make_filter(self.config.get('angle_window', 3)) for name in ANGLE_SIGNALS}
        self.filters['confidence'] = self._make_filter(self.config.get('confidence_window', 5))
        self._last_emit = None

    def _make_filter(self, window: int):
        if self.smoothing is SmoothingKind.ONE_EURO:
            return OneEuroFilter(**self.config.get('filter', {}))
        return MovingAverageFilter(window)

    def process_frame(self, frame: LandmarkFrame) -> MonitorResult:
        """Analyzes one frame and returns raw plus smoothed results."""
        start_time = time.perf_counter()
        t = frame.timestamp

        raw = analyze_posture(frame.landmarks)
        sitting = calculate_sitting_metrics(frame.landmarks, self.baseline, self.neck_history)
        if sitting.cva_deg.visible:
            self.neck_history.append(sitting.cva_deg.value)

        # --- Smooth the limb and pelvis metrics, re-banding the smoothed value ---
        smoothed_sitting = sitting.model_copy(update={
            'knee_deg': self._smooth_metric('knee_deg', 'knee', sitting.knee_deg, t),
            'elbow_deg': self._smooth_metric('elbow_deg', 'elbow', sitting.elbow_deg, t),
            'pelvic_tilt_deg': self._smooth_metric('pelvic_tilt_deg', 'pelvic_tilt', sitting.pelvic_tilt_deg, t),
        })

        # --- Smooth the frame-level assessment and re-classify ---
        confidence = float(self.filters['confidence'].update(raw.metrics.confidence, t))
        if raw.metrics.confidence < MIN_CONFIDENCE:
            analysis = insufficient_visibility(confidence)
            self._set_state(MonitorState.LOW_CONFIDENCE)
        else:
            analysis = self._smooth_analysis(raw, confidence, t)
            self._set_state(MonitorState.TRACKING)
        analysis = analysis.model_copy(update={
            'metrics': analysis.metrics.model_copy(update={'sitting_metrics': smoothed_sitting}),
        })

        processing_time_ms = (time.perf_counter() - start_time) * 1000
        return MonitorResult(
            frame_id=frame.frame_id,
            timestamp=t,
            processing_time_ms=processing_time_ms,
            state=self.state,
            raw_analysis=raw,
            analysis=analysis,
            sitting_metrics=smoothed_sitting,
            calibrated=self.baseline is not None,
            performance_metrics={'neck_history_len': float(len(self.neck_history))},
        )

    def _smooth_metric(self, name, signal, metric, t):
        if not metric.visible:
            return metric
        value = self.filters[signal].update(metric.value, t)
        return make_metric(name, value, True, metric.confidence)

    def _smooth_analysis(self, raw: PostureAnalysis, confidence: float, t: float) -> PostureAnalysis:
        head_neck_angle = float(self.filters['head_neck_angle'].update(raw.metrics.head_neck_angle, t))
        spine_visible = raw.metrics.spine_visible
        trunk_flexion = float(self.filters['trunk_flexion'].update(raw.metrics.trunk_flexion, t)) if spine_visible else 0.0

        status, severity, message = classify_trunk_flexion(trunk_flexion, spine_visible)
        metrics = raw.metrics.model_copy(update={
            'head_neck_angle': head_neck_angle,
            'trunk_flexion': trunk_flexion,
            'confidence': confidence,
        })
        return PostureAnalysis(status=status, metrics=metrics, severity=severity, message=message)

    def _set_state(self, state: MonitorState):
        if state is not self.state:
            logger.debug("Monitor state %s -> %s", self.state.value, state.value)
            self.state = state

    def calibrate(self, frame: LandmarkFrame) -> Optional[Baseline]:
        """Captures a pelvic-tilt / shoulder-width baseline from the given frame.

        Returns None and keeps the previous baseline if the trunk is not visible.
        On success the filters and neck history start over.
        """
        lm = frame.landmarks
        if not all_visible(lm[P.LEFT_SHOULDER], lm[P.RIGHT_SHOULDER], lm[P.LEFT_HIP], lm[P.RIGHT_HIP]):
            logger.warning("Calibration skipped on frame %d: shoulders/hips not visible", frame.frame_id)
            return None

        baseline = Baseline(
            pelvic_tilt=absolute_pelvic_tilt(lm),
            shoulder_width=distance(lm[P.LEFT_SHOULDER], lm[P.RIGHT_SHOULDER]),
        )
        self._reset_tracking()
        self.baseline = baseline
        logger.info("Calibrated: pelvic tilt %.1f°, shoulder width %.3f", baseline.pelvic_tilt, baseline.shoulder_width)
        return baseline

    def should_emit(self, timestamp: float) -> bool:
        """Throttles downstream updates to one per emit_interval seconds."""
        if self._last_emit is not None and timestamp - self._last_emit < self.emit_interval:
            return False
        self._last_emit = timestamp
        return True

    def _reset_tracking(self):
        for f in self.filters.values():
            f.reset()
        self.neck_history.clear()
        self._last_emit = None

    def reset(self):
        """Session restart: drops the baseline, filter state and history."""
        self._reset_tracking()
        self.baseline = None
        self.state = MonitorState.INITIALIZING
        logger.info("Posture monitor reset")
