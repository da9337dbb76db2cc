import unittest
from datetime import datetime, timezone

from tcxdb import read_file, read_string, Config, DocumentStructureError
from tcxdb.model import CoursePointType, Intensity, Position, History, Workouts, CourseFolder
from test.test_common import *


class CoursesTestCase(unittest.TestCase):

    @classmethod
    def setUpClass(cls):
        cls.tcx = read_file(COURSE_SAMPLE)

    def test_01_folders(self):
        """History and Workouts carry nothing but their presence."""
        folders = self.tcx.folders
        self.assertEqual(folders.history, History())
        self.assertEqual(folders.workouts, Workouts())
        self.assertIsNone(self.tcx.activities)

    def test_02_folder_chain(self):
        root_folder = self.tcx.folders.courses.course_folder
        chain = root_folder.chain()
        self.assertEqual([f.name for f in chain], ['My Courses', 'Hills', 'Long'])
        self.assertIsNone(chain[-1].folder)
        self.assertEqual(chain[-1].course_name_ref.id, 'Sugarloaf Loop')
        self.assertEqual(chain[-1].notes, 'Weekend only')
        self.assertIsNone(root_folder.course_name_ref)
        self.assertEqual(self.tcx.folders.courses.courses, [])

    def test_03_only_one_child_folder_per_level(self):
        doc = """<TrainingCenterDatabase><Folders><Courses><CourseFolder Name="a">
                   <Folder Name="b"/><Folder Name="c"/>
                 </CourseFolder></Courses></Folders></TrainingCenterDatabase>"""
        folder = read_string(doc).folders.courses.course_folder
        self.assertEqual([f.name for f in folder.chain()], ['a', 'b'])

    def folder_chain_doc(self, depth: int) -> str:
        doc = '<Folder>' * depth + '</Folder>' * depth
        return f'<TrainingCenterDatabase><Folders><Courses><CourseFolder>{doc}</CourseFolder></Courses>' \
               f'</Folders></TrainingCenterDatabase>'

    def test_04_deep_folder_chain(self):
        folder = read_string(self.folder_chain_doc(100)).folders.courses.course_folder
        self.assertEqual(len(folder.chain()), 101)
        self.assertEqual(folder.chain()[-1], CourseFolder())

    def test_04b_folder_chain_past_libxml2_default_depth(self):
        """The default configuration has no fixed depth limit of its own."""
        folder = read_string(self.folder_chain_doc(300)).folders.courses.course_folder
        self.assertEqual(len(folder.chain()), 301)

    def test_04c_folder_chain_too_deep(self):
        with self.assertRaises(DocumentStructureError):
            read_string(self.folder_chain_doc(1200))
        with self.assertRaises(DocumentStructureError):
            read_string(self.folder_chain_doc(300), Config(huge_tree=False))

    def test_05_course(self):
        courses = self.tcx.courses.courses
        self.assertEqual(len(courses), 1)
        course = courses[0]
        self.assertEqual(course.name, 'Sugarloaf Loop')
        self.assertIsNone(course.creator)
        self.assertIsNone(course.notes)
        self.assertEqual(len(course.tracks), 1)
        self.assertEqual(len(course.tracks[0].trackpoints), 2)
        self.assertIsNone(self.tcx.courses.course_folder)

    def test_06_course_lap(self):
        lap = self.tcx.courses.courses[0].course_lap
        self.assertEqual(lap.total_time_seconds, 3600.0)
        self.assertEqual(lap.distance_meters, 25000.0)
        self.assertEqual(lap.begin_position, Position(39.2, -77.4))
        self.assertEqual(lap.end_position, Position(39.25, -77.45))
        self.assertEqual(lap.begin_altitude_meters, 110.0)
        self.assertEqual(lap.end_altitude_meters, 115.5)
        self.assertEqual(lap.average_heart_rate.value, 135.0)
        self.assertIsNone(lap.maximum_heart_rate)
        self.assertEqual(lap.intensity, Intensity.ACTIVE)
        self.assertEqual(lap.cadence, 90)

    def test_07_course_point(self):
        point = self.tcx.courses.courses[0].course_point
        self.assertEqual(point.name, 'KOM')
        self.assertEqual(point.time, datetime(2021, 3, 1, 9, 30, tzinfo=timezone.utc))
        self.assertEqual(point.point_type, CoursePointType.HORS_CATEGORY)
        self.assertEqual(point.altitude_meters, 390.0)
        self.assertEqual(point.notes, 'Steep')

    def test_08_point_types(self):
        """Every point type in the vocabulary is accepted as written."""
        for point_type in CoursePointType:
            doc = f"""<TrainingCenterDatabase><Courses><Course><CoursePoint><Name>p</Name>
                        <Time>2021-03-01T10:00:00Z</Time><PointType>{point_type.value}</PointType>
                      </CoursePoint></Course></Courses></TrainingCenterDatabase>"""
            tcx = read_string(doc)
            self.assertIs(tcx.courses.courses[0].course_point.point_type, point_type)


if __name__ == '__main__':
    unittest.main()
