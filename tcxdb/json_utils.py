"""Classes and functions to help with converting tcxdb objects to
JSON.
"""

import dataclasses
import json
import datetime
from enum import Enum

import numpy as np


class TcxJSONEncoder(json.JSONEncoder):

    """A custom JSON encoder that can handle the datatypes found in the
    TCX model (and in DataFrames derived from it).
    """

    def default(self, obj):
        if isinstance(obj, (datetime.datetime, datetime.date, datetime.time)):
            # Convert datetime and similar objects to ISO 8601-formatted strings
            return obj.isoformat()
        elif isinstance(obj, datetime.timedelta):
            # Convert timedelta objects to seconds
            return obj.total_seconds()
        elif isinstance(obj, Enum):
            # Enum members are written using the text that appears in TCX files
            return obj.value
        elif dataclasses.is_dataclass(obj) and not isinstance(obj, type):
            return dataclasses.asdict(obj)
        elif isinstance(obj, np.integer):
            return int(obj)
        elif isinstance(obj, np.floating):
            return float(obj)
        elif isinstance(obj, np.ndarray):
            # Convert NumPy arrays to lists
            return obj.tolist()

        return super(TcxJSONEncoder, self).default(obj)
