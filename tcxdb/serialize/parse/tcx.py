"""Parser for TCX files."""

import lxml.etree

from tcxdb.model import (TrainingCenterDatabase, Activities, Activity, ActivityLap, Track, Trackpoint, HeartRate,
                         Position, Extensions, Tpx, Courses, CourseFolder, Course, CourseLap, CoursePoint,
                         NameKeyReference, Folders, History, Workouts, Author, Build, Version, Creator, Intensity,
                         TriggerMethod, CoursePointType, BuildType, SensorState)
from tcxdb.serialize._xml_namespaces import TCX_NAMESPACES
from tcxdb.serialize.parse._base import BaseParser, Binding, logger

B = Binding


class TCXParser(BaseParser):

    ROOT_TAG = 'TrainingCenterDatabase'
    ROOT_TYPE = TrainingCenterDatabase

    # Tag names are those used in the TCX v2 schema (and, for Tpx, the Garmin ActivityExtension v2 schema).
    BINDINGS = {
        TrainingCenterDatabase: (
            B('folders', 'Folders', Folders),
            B('activities', 'Activities', Activities),
            B('courses', 'Courses', Courses),
            B('author', 'Author', Author),
            B('extensions', 'Extensions', Extensions),
        ),
        Activities: (
            B('activities', 'Activity', Activity, repeated=True),
        ),
        Activity: (
            B('sport', 'Sport', 'string', required=True, attribute=True),
            B('id', 'Id', 'string', required=True),
            B('laps', 'Lap', ActivityLap, repeated=True),
            B('notes', 'Notes', 'string'),
            B('creator', 'Creator', Creator),
            B('extensions', 'Extensions', Extensions),
        ),
        ActivityLap: (
            B('start_time', 'StartTime', 'datetime', attribute=True),
            B('total_time_seconds', 'TotalTimeSeconds', 'float', required=True),
            B('distance_meters', 'DistanceMeters', 'float', required=True),
            B('maximum_speed', 'MaximumSpeed', 'float'),
            B('calories', 'Calories', 'uint16', required=True),
            B('recorded_average_heart_rate', 'AverageHeartRateBpm', HeartRate),
            B('recorded_maximum_heart_rate', 'MaximumHeartRateBpm', HeartRate),
            B('intensity', 'Intensity', Intensity),
            B('cadence', 'Cadence', 'uint8'),
            B('trigger_method', 'TriggerMethod', TriggerMethod),
            B('tracks', 'Track', Track, repeated=True),
            B('notes', 'Notes', 'string'),
            B('extensions', 'Extensions', Extensions),
        ),
        Track: (
            B('trackpoints', 'Trackpoint', Trackpoint, repeated=True),
        ),
        Trackpoint: (
            B('time', 'Time', 'datetime', required=True),
            B('position', 'Position', Position),
            B('altitude_meters', 'AltitudeMeters', 'float'),
            B('distance_meters', 'DistanceMeters', 'float'),
            B('heart_rate', 'HeartRateBpm', HeartRate),
            B('cadence', 'Cadence', 'uint8'),
            B('sensor_state', 'SensorState', SensorState),
            B('extensions', 'Extensions', Extensions),
        ),
        HeartRate: (
            B('value', 'Value', 'float', required=True),
        ),
        Position: (
            B('latitude', 'LatitudeDegrees', 'float', required=True),
            B('longitude', 'LongitudeDegrees', 'float', required=True),
        ),
        Extensions: (
            B('tpx', 'TPX', Tpx),
        ),
        Tpx: (
            B('speed', 'Speed', 'float'),
            B('watts', 'Watts', 'uint16'),
        ),
        Folders: (
            B('history', 'History', History),
            B('workouts', 'Workouts', Workouts),
            B('courses', 'Courses', Courses),
        ),
        History: (),
        Workouts: (),
        Courses: (
            B('course_folder', 'CourseFolder', CourseFolder),
            B('courses', 'Course', Course, repeated=True),
        ),
        CourseFolder: (
            B('name', 'Name', 'string', attribute=True),
            # Only one nested folder is kept per level, so folders form a chain.
            B('folder', 'Folder', CourseFolder),
            B('course_name_ref', 'CourseNameRef', NameKeyReference),
            B('notes', 'Notes', 'string'),
            B('extensions', 'Extensions', Extensions),
        ),
        NameKeyReference: (
            B('id', 'Id', 'string', required=True),
        ),
        Course: (
            B('name', 'Name', 'string'),
            B('course_lap', 'Lap', CourseLap),
            B('tracks', 'Track', Track, repeated=True),
            B('notes', 'Notes', 'string'),
            B('course_point', 'CoursePoint', CoursePoint),
            B('creator', 'Creator', Creator),
            B('extensions', 'Extensions', Extensions),
        ),
        CourseLap: (
            B('total_time_seconds', 'TotalTimeSeconds', 'float', required=True),
            B('distance_meters', 'DistanceMeters', 'float', required=True),
            B('begin_position', 'BeginPosition', Position),
            B('begin_altitude_meters', 'BeginAltitudeMeters', 'float'),
            B('end_position', 'EndPosition', Position),
            B('end_altitude_meters', 'EndAltitudeMeters', 'float'),
            B('average_heart_rate', 'AverageHeartRateBpm', HeartRate),
            B('maximum_heart_rate', 'MaximumHeartRateBpm', HeartRate),
            B('intensity', 'Intensity', Intensity),
            B('cadence', 'Cadence', 'uint8'),
            B('extensions', 'Extensions', Extensions),
        ),
        CoursePoint: (
            B('name', 'Name', 'string', required=True),
            B('time', 'Time', 'datetime', required=True),
            B('position', 'Position', Position),
            B('altitude_meters', 'AltitudeMeters', 'float'),
            B('point_type', 'PointType', CoursePointType, required=True),
            B('notes', 'Notes', 'string'),
            B('extensions', 'Extensions', Extensions),
        ),
        Author: (
            B('name', 'Name', 'string'),
            B('build', 'Build', Build),
            B('lang_id', 'LangID', 'string'),
            B('part_number', 'PartNumber', 'string'),
        ),
        Build: (
            B('version', 'Version', Version, required=True),
            B('build_type', 'Type', BuildType),
            B('time', 'Time', 'string'),
            B('builder', 'Builder', 'string'),
        ),
        Creator: (
            B('name', 'Name', 'string'),
            B('unit_id', 'UnitId', 'uint32'),
            B('product_id', 'ProductID', 'uint16'),
            B('version', 'Version', Version),
        ),
        Version: (
            B('version_major', 'VersionMajor', 'uint16', required=True),
            B('version_minor', 'VersionMinor', 'uint16', required=True),
            B('build_major', 'BuildMajor', 'uint16'),
            B('build_minor', 'BuildMinor', 'uint16'),
        ),
    }

    def parse(self, data: bytes) -> TrainingCenterDatabase:
        tcx = super().parse(data)
        if tcx.activities is not None:
            logger.debug(f'Mapped {len(tcx.activities.activities)} activities.')
        return tcx

    def _load_root(self, data: bytes) -> lxml.etree._Element:
        root = super()._load_root(data)
        if lxml.etree.QName(root).namespace not in (None, TCX_NAMESPACES[None]):
            # Not an error: namespaces are not enforced.
            logger.debug(f'Root element has unexpected namespace "{lxml.etree.QName(root).namespace}".')
        return root
