# seated_posture_engine/main.py
import logging
import sys
import yaml
import numpy as np

from posture_engine.common.enums import LogLevel
from posture_engine.common.models import LandmarkFrame
from posture_engine.processing.posture_monitor import PostureMonitor

logger = logging.getLogger("seated_posture_engine")

def load_config(path: str) -> dict:
    with open(path, 'r') as f:
        return yaml.safe_load(f) or {}

def configure_logging(config: dict):
    level = LogLevel(config.get('level', LogLevel.INFO.value))
    logging.basicConfig(level=getattr(logging, level.value), format="%(asctime)s %(levelname)s %(name)s: %(message)s")

def main(config_path: str = 'config.yaml'):
    """
    Replays a recorded landmark session through the posture monitor.
    The recording is an .npz with `landmarks` (N, 33, 4) and `timestamps` (N,).
    """
    try:
        config = load_config(config_path)
        configure_logging(config.get('logging', {}))

        recording = np.load(config['replay']['source'])
        landmarks, timestamps = recording['landmarks'], recording['timestamps']
    except (IOError, yaml.YAMLError, KeyError) as e:
        print(f"ERROR: Failed to initialize. {e}")
        return 1

    monitor = PostureMonitor(config.get('monitor', {}))
    frames = (LandmarkFrame.from_array(lm, frame_id=i, timestamp=float(t))
              for i, (lm, t) in enumerate(zip(landmarks, timestamps)))

    for frame in frames:
        if monitor.baseline is None:
            monitor.calibrate(frame)

        result = monitor.process_frame(frame)

        if monitor.should_emit(result.timestamp):
            logger.info(
                "frame %d %s | %s | trunk %.1f° | ergo %.0f",
                result.frame_id,
                result.analysis.status.value,
                result.analysis.message,
                result.analysis.metrics.trunk_flexion,
                result.sitting_metrics.ergo_score.value,
            )

    logger.info("Replay finished: %d frames", len(timestamps))
    return 0

if __name__ == "__main__":
    sys.exit(main(*sys.argv[1:2]))
