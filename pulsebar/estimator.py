"""Remaining time and throughput estimation."""

__all__ = ["SMOOTHING", "RateEstimator"]

# Weight of the newest sample in the moving average
SMOOTHING = 0.3


class RateEstimator:
    """Exponential moving average of the time spent per unit of work.

    Samples are taken between consecutive redraws rather than per update, so
    bursty reporting within a throttle window does not skew the estimate.
    """

    def __init__(self, total: int, smoothing: float = SMOOTHING):
        if not 0 < smoothing < 1:
            raise ValueError(f"Smoothing must be between 0 and 1, got {smoothing}")
        self.total = total
        self.smoothing = smoothing
        self.rate_per_unit = 0.0  # Seconds per unit, 0 until the first sample
        self.samples = 0

    def sample(
        self, elapsed: float, current: int, last_elapsed: float, last_count: int
    ) -> tuple[float, float]:
        """Return (eta, throughput) in seconds and units/sec.

        Args:
            elapsed: Seconds since the work started
            current: Units completed so far
            last_elapsed: Value of elapsed at the previous redraw
            last_count: Value of current at the previous redraw
        """
        if current <= 0:
            return 0.0, 0.0
        throughput = current / elapsed if elapsed > 0 else 0.0

        dt = elapsed - last_elapsed
        dcount = current - last_count
        if dt > 0 and dcount > 0:
            instant = dt / dcount
            if self.samples == 0:
                self.rate_per_unit = instant
            else:
                a = self.smoothing
                self.rate_per_unit = a * instant + (1 - a) * self.rate_per_unit
            self.samples += 1

        eta = self.rate_per_unit * self.total - elapsed
        return max(eta, 0.0), throughput
