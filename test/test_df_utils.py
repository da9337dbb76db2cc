import unittest

import pandas as pd

from tcxdb import read_file, read_string, compute_heart_rates
from tcxdb.df_utils import points_dataframe, laps_dataframe, POINTS_COL_NAMES, LAPS_COL_NAMES
from test.test_common import *


class DataFrameTestCase(unittest.TestCase):

    @classmethod
    def setUpClass(cls):
        cls.tcx = read_file(RUN_SAMPLE)
        compute_heart_rates(cls.tcx)
        cls.activity = cls.tcx.activities.activities[0]

    def test_01_points(self):
        df = points_dataframe(self.activity.laps[0].tracks)
        self.assertEqual(tuple(df.columns), POINTS_COL_NAMES)
        self.assertEqual(len(df), 4)
        self.assertEqual(list(df['track']), [0, 0, 1, 1])
        self.assertEqual(list(df['point_no']), [0, 1, 2, 3])
        self.assertEqual(df.loc[0, 'hr'], 120.0)
        self.assertTrue(pd.isnull(df.loc[1, 'hr']))
        self.assertEqual(df.loc[0, 'speed'], 2.5)
        self.assertTrue(pd.isnull(df.loc[2, 'latitude']))
        self.assertEqual(df.loc[3, 'distance'], 1200.0)

    def test_02_no_points(self):
        df = points_dataframe([])
        self.assertTrue(df.empty)
        self.assertEqual(tuple(df.columns), POINTS_COL_NAMES)

    def test_03_power(self):
        tcx = read_string(generated_activity(10, cadence=87, watts=216))
        df = points_dataframe(tcx.activities.activities[0].laps[0].tracks)
        self.assertTrue((df['watts'] == 216).all())
        self.assertTrue((df['cadence'] == 87).all())

    def test_04_laps(self):
        df = laps_dataframe(self.activity)
        self.assertEqual(tuple(df.columns), LAPS_COL_NAMES[1:])
        self.assertEqual(len(df), 2)
        self.assertEqual(df.loc[0, 'points'], 4)
        self.assertEqual(df.loc[0, 'max_hr'], 160.0)
        self.assertEqual(df.loc[0, 'intensity'], 'Active')
        self.assertEqual(df.loc[0, 'duration'], pd.Timedelta(seconds=600.5))
        self.assertTrue(pd.isnull(df.loc[1, 'mean_hr']))
        self.assertEqual(df.loc[1, 'trigger_method'], 'HeartRate')


if __name__ == '__main__':
    unittest.main()
