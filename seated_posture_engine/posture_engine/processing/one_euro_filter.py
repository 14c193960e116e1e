# seated_posture_engine/posture_engine/processing/one_euro_filter.py
import time
import numpy as np

def smoothing_factor(te, cutoff):
    """alpha = 1 / (1 + tau / te) with tau = 1 / (2*pi*cutoff)."""
    r = 2 * np.pi * cutoff * te
    return r / (r + 1)

class LowPassFilter:
    """Exponential low-pass that snaps to the first sample."""

    def __init__(self, alpha):
        self.alpha = alpha
        self.y = 0.0
        self.has_last = False

    def update(self, x):
        if not self.has_last:
            self.y = x
            self.has_last = True
        else:
            self.y = self.alpha * x + (1 - self.alpha) * self.y
        return self.y

    def reset(self):
        self.y = 0.0
        self.has_last = False

class OneEuroFilter:
    """
    One-Euro filter for smoothing a scalar (or array) signal such as a joint angle.
    Fast motion raises the cutoff to cut lag; slow motion lowers it to cut jitter.
    """
    def __init__(self, freq=30.0, min_cutoff=1.0, beta=0.007, d_cutoff=1.0):
        self.freq = freq
        self.min_cutoff = min_cutoff
        self.beta = beta
        self.d_cutoff = d_cutoff
        self.x_filter = LowPassFilter(smoothing_factor(1.0 / freq, min_cutoff))
        self.dx_filter = LowPassFilter(smoothing_factor(1.0 / freq, d_cutoff))
        self.t_prev = None

    def update(self, x, timestamp=None):
        """Feeds one sample; timestamp is in seconds (defaults to perf_counter)."""
        t = time.perf_counter() if timestamp is None else timestamp
        te = 1.0 / self.freq if self.t_prev is None else t - self.t_prev
        self.t_prev = t

        # Non-increasing time: hold the previous output
        if te <= 0:
            return self.x_filter.y

        dx = (x - self.x_filter.y) / te if self.x_filter.has_last else 0.0
        dx_hat = self.dx_filter.update(dx)

        cutoff = self.min_cutoff + self.beta * np.abs(dx_hat)
        self.x_filter.alpha = smoothing_factor(te, cutoff)
        return self.x_filter.update(x)

    def __call__(self, x, timestamp=None):
        return self.update(x, timestamp)

    def reset(self):
        self.x_filter.reset()
        self.dx_filter.reset()
        self.t_prev = None
