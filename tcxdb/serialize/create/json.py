"""Functions for exporting the TCX model to JSON."""

import json
from typing import Optional

from tcxdb.config import Config
from tcxdb.exceptions import ExportError
from tcxdb.json_utils import TcxJSONEncoder
from tcxdb.logger import get_logger
from tcxdb.model import TrainingCenterDatabase

logger = get_logger('create')


def to_json(tcx: TrainingCenterDatabase, indent: Optional[int] = 4) -> str:
    """Return a JSON representation of `tcx`. Keys are the attribute names
    of the model classes.
    """
    return json.dumps(tcx, cls=TcxJSONEncoder, indent=indent)


def export_json(tcx: TrainingCenterDatabase, fpath: str, config: Optional[Config] = None):
    """Write `tcx` to `fpath` as pretty-printed JSON.

    If an ExportError is raised, any file left at `fpath` should be treated
    as invalid.
    """
    config = config or Config()
    try:
        data = to_json(tcx, indent=config.json_indent)
    except (TypeError, ValueError) as e:
        raise ExportError(f'Could not serialize model: {e}') from e
    try:
        with open(fpath, 'w', encoding='utf-8') as f:
            f.write(data)
    except OSError as e:
        raise ExportError(f'Could not write "{fpath}": {e}') from e
    logger.info(f'Exported JSON to "{fpath}".')
