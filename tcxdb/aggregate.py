"""Derive summary statistics for laps from their trackpoints."""

from typing import List, Optional, Tuple

from tcxdb.logger import get_logger
from tcxdb.model import ActivityLap, TrainingCenterDatabase

logger = get_logger(__name__)


def heart_rate_samples(lap: ActivityLap) -> List[float]:
    """The heart rate readings of `lap`, across all of its tracks, in
    document order. Trackpoints with no HeartRateBpm are skipped.
    """
    return [point.heart_rate.value
            for track in lap.tracks
            for point in track.trackpoints
            if point.heart_rate is not None]


def lap_heart_rates(lap: ActivityLap) -> Tuple[Optional[float], Optional[float]]:
    """Return the mean and maximum heart rate over the trackpoints of `lap`
    that have a heart rate reading.

    Trackpoints without a reading are skipped rather than counted as zero.
    If no trackpoint has a reading, return (None, None).
    """
    samples = heart_rate_samples(lap)
    if not samples:
        return None, None
    return sum(samples) / len(samples), max(samples)


def compute_heart_rates(tcx: TrainingCenterDatabase):
    """Set `average_heart_rate` and `maximum_heart_rate` on every
    ActivityLap in `tcx`, in place. Any previously computed values are
    overwritten. Course laps are not touched.
    """
    for lap in tcx.iter_activity_laps():
        lap.average_heart_rate, lap.maximum_heart_rate = lap_heart_rates(lap)
        logger.debug(f'Lap heart rate: mean {lap.average_heart_rate}, max {lap.maximum_heart_rate}.')
