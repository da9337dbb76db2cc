"""Functions for viewing the TCX model as pandas DataFrames."""

from typing import Sequence

import pandas as pd

from tcxdb.model import Activity, Track

# Columns of the DataFrame returned by points_dataframe
POINTS_COL_NAMES = (
    'track',
    'point_no',
    'time',
    'latitude',
    'longitude',
    'elevation',
    'distance',
    'hr',
    'cadence',
    'speed',
    'watts'
)

# Columns of the DataFrame returned by laps_dataframe
LAPS_COL_NAMES = (
    'lap',
    'start_time',
    'duration',
    'distance',
    'calories',
    'max_speed',
    'mean_hr',
    'max_hr',
    'intensity',
    'cadence',
    'trigger_method',
    'points'
)


def points_dataframe(tracks: Sequence[Track]) -> pd.DataFrame:
    """Return a DataFrame with one row for each Trackpoint in `tracks`, in
    document order. Values that were not recorded are null.
    """
    data = []
    point_no = 0
    for track_no, track in enumerate(tracks):
        for point in track.trackpoints:
            row = {
                'track': track_no,
                'point_no': point_no,
                'time': point.time,
                'elevation': point.altitude_meters,
                'distance': point.distance_meters,
                'cadence': point.cadence
            }
            if point.position is not None:
                row['latitude'] = point.position.latitude
                row['longitude'] = point.position.longitude
            if point.heart_rate is not None:
                row['hr'] = point.heart_rate.value
            if (point.extensions is not None) and (point.extensions.tpx is not None):
                row['speed'] = point.extensions.tpx.speed
                row['watts'] = point.extensions.tpx.watts
            data.append(row)
            point_no += 1
    return pd.DataFrame(data, columns=POINTS_COL_NAMES)


def laps_dataframe(activity: Activity) -> pd.DataFrame:
    """Return a DataFrame summarising each lap of `activity`."""
    data = []
    for i, lap in enumerate(activity.laps):
        data.append({
            'lap': i,
            'start_time': lap.start_time,
            'duration': pd.to_timedelta(lap.total_time_seconds, unit='s'),
            'distance': lap.distance_meters,
            'calories': lap.calories,
            'max_speed': lap.maximum_speed,
            'mean_hr': lap.average_heart_rate,
            'max_hr': lap.maximum_heart_rate,
            'intensity': lap.intensity.value if lap.intensity is not None else None,
            'cadence': lap.cadence,
            'trigger_method': lap.trigger_method.value if lap.trigger_method is not None else None,
            'points': sum(len(t.trackpoints) for t in lap.tracks)
        })
    return pd.DataFrame(data, columns=LAPS_COL_NAMES).set_index('lap')
