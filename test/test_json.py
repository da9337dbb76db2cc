import json
import os
import unittest

from tcxdb import (read_file, read_string, read_json, export_json, compute_heart_rates, parse_file, Config,
                   ExportError, TcxInputError, InvalidEnumError, MissingFieldError, FieldTypeError,
                   MalformedTimestampError)
from tcxdb.serialize.create import to_json
from test.test_common import *


class JSONTestCase(BaseTestCase):

    def export_and_load(self, tcx, name='out.json', config=None):
        fpath = os.path.join(self.tmp_dir, name)
        export_json(tcx, fpath, config)
        with open(fpath) as f:
            raw = json.load(f)
        return fpath, raw

    def test_01_round_trip(self):
        """Exporting to JSON and loading the JSON again gives back an equal
        model, computed heart rates included.
        """
        for fpath in (RUN_SAMPLE, COURSE_SAMPLE):
            tcx = read_file(fpath)
            compute_heart_rates(tcx)
            out_fpath, _ = self.export_and_load(tcx)
            self.assertEqual(read_json(out_fpath), tcx)
        tcx = read_string(generated_activity(200, cadence=87, watts=216))
        compute_heart_rates(tcx)
        out_fpath, _ = self.export_and_load(tcx)
        self.assertEqual(read_json(out_fpath), tcx)

    def test_02_field_names(self):
        tcx = read_file(RUN_SAMPLE)
        compute_heart_rates(tcx)
        _, raw = self.export_and_load(tcx)
        self.assertEqual(set(raw), {'activities', 'folders', 'courses', 'author', 'extensions'})
        lap = raw['activities']['activities'][0]['laps'][0]
        self.assertEqual(lap['total_time_seconds'], 600.5)
        self.assertEqual(lap['intensity'], 'Active')
        self.assertEqual(lap['trigger_method'], 'Manual')
        self.assertEqual(lap['start_time'], '2021-01-19T17:02:25+00:00')
        self.assertEqual(lap['maximum_heart_rate'], 160.0)
        self.assertEqual(lap['recorded_average_heart_rate'], {'value': 141.0})
        point = lap['tracks'][0]['trackpoints'][0]
        self.assertEqual(point['heart_rate'], {'value': 120.0})
        self.assertEqual(point['extensions'], {'tpx': {'speed': 2.5, 'watts': None}})
        self.assertIsNone(lap['tracks'][0]['trackpoints'][1]['heart_rate'])
        self.assertIsNone(raw['courses'])

    def test_03_course_point_type_text(self):
        _, raw = self.export_and_load(read_file(COURSE_SAMPLE))
        point = raw['courses']['courses'][0]['course_point']
        self.assertEqual(point['point_type'], 'Hors Category')
        self.assertEqual(raw['folders']['history'], {})

    def test_04_pretty_printed(self):
        tcx = read_string('<TrainingCenterDatabase><Activities/></TrainingCenterDatabase>')
        fpath, _ = self.export_and_load(tcx)
        with open(fpath) as f:
            self.assertEqual(f.read(), to_json(tcx, indent=4))
        fpath, _ = self.export_and_load(tcx, config=Config(json_indent=1))
        with open(fpath) as f:
            self.assertEqual(f.read(), '{\n "activities": {\n  "activities": []\n },\n "folders": null,\n'
                                       ' "courses": null,\n "author": null,\n "extensions": null\n}')

    def test_05_export_error(self):
        tcx = read_file(RUN_SAMPLE)
        with self.assertRaises(ExportError):
            export_json(tcx, os.path.join(self.tmp_dir, 'no_such_dir', 'out.json'))
        with self.assertRaises(ExportError):
            export_json(tcx, self.tmp_dir)

    def test_06_read_json_errors(self):
        fpath = os.path.join(self.tmp_dir, 'bad.json')
        with open(fpath, 'w') as f:
            f.write('{not json')
        with self.assertRaises(TcxInputError):
            read_json(fpath)
        with self.assertRaises(TcxInputError):
            read_json(os.path.join(self.tmp_dir, 'missing.json'))

        with open(fpath, 'w') as f:
            json.dump({'activities': {'activities': [{'sport': 'Running', 'id': 'x', 'laps': [
                {'total_time_seconds': 1, 'distance_meters': 1, 'calories': 1, 'intensity': 'Sleeping'}
            ]}]}}, f)
        with self.assertRaises(InvalidEnumError) as cm:
            read_json(fpath)
        self.assertIn('intensity', cm.exception.path)

        with open(fpath, 'w') as f:
            json.dump({'activities': {'activities': [{'sport': 'Running'}]}}, f)
        with self.assertRaises(MissingFieldError):
            read_json(fpath)

    def test_07_parse_file(self):
        """parse_file picks the loader by file extension."""
        tcx = parse_file(RUN_SAMPLE)
        fpath, _ = self.export_and_load(tcx)
        self.assertEqual(parse_file(fpath), tcx)
        with self.assertRaises(TcxInputError):
            parse_file(os.path.join(TEST_DATA_DIR, 'test_config.ini'))

    def write_lap_json(self, **lap_fields) -> str:
        lap = {'total_time_seconds': 1, 'distance_meters': 1, 'calories': 1}
        lap.update(lap_fields)
        fpath = os.path.join(self.tmp_dir, 'lap.json')
        with open(fpath, 'w') as f:
            json.dump({'activities': {'activities': [{'sport': 'Running', 'id': 'x', 'laps': [lap]}]}}, f)
        return fpath

    def test_08_json_timestamps_in_utc(self):
        lap = read_json(self.write_lap_json(start_time='2021-03-08T19:00:00+01:00')).activities.activities[0].laps[0]
        self.assertEqual(lap.start_time, START_TIME)
        lap = read_json(self.write_lap_json(start_time='2021-03-08T18:00:00')).activities.activities[0].laps[0]
        self.assertEqual(lap.start_time, START_TIME)
        self.assertEqual(lap.start_time.utcoffset(), timedelta(0))
        with self.assertRaises(MalformedTimestampError):
            read_json(self.write_lap_json(start_time='2021-03-08'))

    def test_09_json_integer_ranges(self):
        lap = read_json(self.write_lap_json(calories=65535, cadence=255)).activities.activities[0].laps[0]
        self.assertEqual((lap.calories, lap.cadence), (65535, 255))
        with self.assertRaises(FieldTypeError) as cm:
            read_json(self.write_lap_json(calories=65536))
        self.assertIn('calories', cm.exception.path)
        with self.assertRaises(FieldTypeError):
            read_json(self.write_lap_json(cadence=-1))


if __name__ == '__main__':
    unittest.main()
