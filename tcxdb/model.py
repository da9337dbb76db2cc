"""Dataclasses describing the contents of a TCX (Training Center XML)
file.

The classes mirror the structure of the TCX v2 schema. Every field that
the schema (or a device) may leave out is Optional and defaults to None,
so that "not recorded" can always be told apart from a recorded zero.
Repeated elements are stored as lists, in document order.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, List


# Closed vocabularies. The enum values are the exact text used in TCX files.

class Intensity(Enum):
    ACTIVE = 'Active'
    RESTING = 'Resting'


class TriggerMethod(Enum):
    MANUAL = 'Manual'
    DISTANCE = 'Distance'
    LOCATION = 'Location'
    TIME = 'Time'
    HEART_RATE = 'HeartRate'


class CoursePointType(Enum):
    GENERIC = 'Generic'
    SUMMIT = 'Summit'
    VALLEY = 'Valley'
    WATER = 'Water'
    FOOD = 'Food'
    DANGER = 'Danger'
    LEFT = 'Left'
    RIGHT = 'Right'
    STRAIGHT = 'Straight'
    FIRST_AID = 'First Aid'
    FOURTH_CATEGORY = '4th Category'
    THIRD_CATEGORY = '3rd Category'
    SECOND_CATEGORY = '2nd Category'
    FIRST_CATEGORY = '1st Category'
    HORS_CATEGORY = 'Hors Category'
    SPRINT = 'Sprint'


class BuildType(Enum):
    INTERNAL = 'Internal'
    ALPHA = 'Alpha'
    BETA = 'Beta'
    RELEASE = 'Release'


class SpeedType(Enum):
    PACE = 'Pace'
    SPEED = 'Speed'


class SensorState(Enum):
    PRESENT = 'Present'
    ABSENT = 'Absent'


# Small value types.

@dataclass
class HeartRate:
    """A heart rate reading, in beats per minute."""
    value: float


@dataclass
class Position:
    """A point on the earth's surface, in decimal degrees. Values are not
    range-checked.
    """
    latitude: float
    longitude: float


@dataclass
class Tpx:
    """The Garmin ActivityExtension "TPX" block (speed in m/s and power in
    watts).
    """
    speed: Optional[float] = None
    watts: Optional[int] = None


@dataclass
class Extensions:
    # Only the TPX extension is understood; anything else in an Extensions
    # element is dropped.
    tpx: Optional[Tpx] = None


@dataclass
class Version:
    version_major: int
    version_minor: int
    build_major: Optional[int] = None
    build_minor: Optional[int] = None


@dataclass
class Build:
    version: Version
    build_type: Optional[BuildType] = None
    time: Optional[str] = None
    builder: Optional[str] = None


@dataclass
class Creator:
    """The device that recorded an activity or course."""
    name: Optional[str] = None
    unit_id: Optional[int] = None
    product_id: Optional[int] = None
    version: Optional[Version] = None


@dataclass
class Author:
    """The application that wrote the file."""
    name: Optional[str] = None
    build: Optional[Build] = None
    lang_id: Optional[str] = None
    part_number: Optional[str] = None


# Activities.

@dataclass
class Trackpoint:
    time: datetime
    position: Optional[Position] = None
    altitude_meters: Optional[float] = None
    distance_meters: Optional[float] = None  # cumulative
    heart_rate: Optional[HeartRate] = None
    cadence: Optional[int] = None
    sensor_state: Optional[SensorState] = None
    extensions: Optional[Extensions] = None


@dataclass
class Track:
    trackpoints: List[Trackpoint] = field(default_factory=list)


@dataclass
class ActivityLap:
    """A single lap of an activity.

    `average_heart_rate` and `maximum_heart_rate` are derived values that
    are only ever set by `tcxdb.aggregate.compute_heart_rates`. The values
    written by the device itself, if any, are kept separately in
    `recorded_average_heart_rate` and `recorded_maximum_heart_rate`.
    """
    total_time_seconds: float
    distance_meters: float
    calories: int
    start_time: Optional[datetime] = None
    maximum_speed: Optional[float] = None
    average_heart_rate: Optional[float] = None
    maximum_heart_rate: Optional[float] = None
    recorded_average_heart_rate: Optional[HeartRate] = None
    recorded_maximum_heart_rate: Optional[HeartRate] = None
    intensity: Optional[Intensity] = None
    cadence: Optional[int] = None
    trigger_method: Optional[TriggerMethod] = None
    tracks: List[Track] = field(default_factory=list)
    notes: Optional[str] = None
    extensions: Optional[Extensions] = None


@dataclass
class Activity:
    sport: str
    id: str
    laps: List[ActivityLap] = field(default_factory=list)
    notes: Optional[str] = None
    creator: Optional[Creator] = None
    extensions: Optional[Extensions] = None


@dataclass
class Activities:
    activities: List[Activity] = field(default_factory=list)


# Courses.

@dataclass
class CourseLap:
    total_time_seconds: float
    distance_meters: float
    begin_position: Optional[Position] = None
    begin_altitude_meters: Optional[float] = None
    end_position: Optional[Position] = None
    end_altitude_meters: Optional[float] = None
    average_heart_rate: Optional[HeartRate] = None
    maximum_heart_rate: Optional[HeartRate] = None
    intensity: Optional[Intensity] = None
    cadence: Optional[int] = None
    extensions: Optional[Extensions] = None


@dataclass
class CoursePoint:
    name: str
    time: datetime
    point_type: CoursePointType
    position: Optional[Position] = None
    altitude_meters: Optional[float] = None
    notes: Optional[str] = None
    extensions: Optional[Extensions] = None


@dataclass
class Course:
    name: Optional[str] = None
    course_lap: Optional[CourseLap] = None
    tracks: List[Track] = field(default_factory=list)
    course_point: Optional[CoursePoint] = None
    notes: Optional[str] = None
    creator: Optional[Creator] = None
    extensions: Optional[Extensions] = None


@dataclass
class NameKeyReference:
    id: str


@dataclass
class CourseFolder:
    """A course folder. A folder has at most one child folder, so nested
    folders form a chain rather than a tree.
    """
    name: Optional[str] = None
    folder: Optional['CourseFolder'] = None
    course_name_ref: Optional[NameKeyReference] = None
    notes: Optional[str] = None
    extensions: Optional[Extensions] = None

    def chain(self) -> List['CourseFolder']:
        """Return this folder followed by each of its descendants."""
        folders = []
        current = self
        while current is not None:
            folders.append(current)
            current = current.folder
        return folders


@dataclass
class Courses:
    course_folder: Optional[CourseFolder] = None
    courses: List[Course] = field(default_factory=list)


# Folders. History and Workouts carry no data; only their presence is recorded.

@dataclass
class History:
    pass


@dataclass
class Workouts:
    pass


@dataclass
class Folders:
    history: Optional[History] = None
    workouts: Optional[Workouts] = None
    courses: Optional[Courses] = None


@dataclass
class TrainingCenterDatabase:
    activities: Optional[Activities] = None
    folders: Optional[Folders] = None
    courses: Optional[Courses] = None
    author: Optional[Author] = None
    extensions: Optional[Extensions] = None

    def iter_activity_laps(self):
        """Yield every ActivityLap in the document, in document order."""
        if self.activities is None:
            return
        for activity in self.activities.activities:
            yield from activity.laps
