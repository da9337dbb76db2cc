"""Parse TCX (Training Center XML) files into dataclasses, derive lap
heart rate statistics and export the result to JSON.
"""

from tcxdb.aggregate import compute_heart_rates
from tcxdb.config import Config
from tcxdb.exceptions import (TcxdbError, TcxInputError, MalformedXMLError, MappingError, MissingFieldError,
                              FieldTypeError, InvalidEnumError, MalformedTimestampError, DocumentStructureError,
                              ExportError, ConfigError)
from tcxdb.metadata import VERSION as __version__
from tcxdb.model import TrainingCenterDatabase
from tcxdb.serialize.create import export_json
from tcxdb.serialize.parse import read, read_string, read_file, parse_file, read_json
