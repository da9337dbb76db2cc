import os
from typing import BinaryIO, Optional, TextIO, Union

from tcxdb.config import Config
from tcxdb.exceptions import TcxInputError
from tcxdb.model import TrainingCenterDatabase
from tcxdb.serialize.parse._base import logger
from tcxdb.serialize.parse.json import read_json
from tcxdb.serialize.parse.tcx import TCXParser


def read_string(data: Union[bytes, str], config: Optional[Config] = None) -> TrainingCenterDatabase:
    """Parse a complete TCX document held in memory."""
    if isinstance(data, str):
        # lxml refuses str input that carries an encoding declaration.
        data = data.encode('utf-8')
    return TCXParser(config).parse(data)


def read(stream: Union[BinaryIO, TextIO], config: Optional[Config] = None) -> TrainingCenterDatabase:
    """Read a TCX document from a readable (binary or text) stream."""
    try:
        data = stream.read()
    except OSError as e:
        raise TcxInputError(f'Could not read from stream: {e}') from e
    return read_string(data, config)


def read_file(fpath: str, config: Optional[Config] = None) -> TrainingCenterDatabase:
    """Open and parse the TCX file at `fpath`."""
    logger.info(f'Parsing TCX file "{fpath}".')
    try:
        f = open(fpath, 'rb')
    except OSError as e:
        raise TcxInputError(f'Could not open "{fpath}": {e}') from e
    with f:
        return read(f, config)


PARSERS = {
    '.tcx': read_file,
    '.json': lambda fpath, config: read_json(fpath)
}


def parse_file(fpath: str, config: Optional[Config] = None) -> TrainingCenterDatabase:
    """Load a TCX file, or a JSON file previously exported by tcxdb,
    choosing the loader by file extension.
    """
    _, ext = os.path.splitext(fpath.lower())
    try:
        parser = PARSERS[ext]
    except KeyError:
        raise TcxInputError(f'No suitable parser found for file "{fpath}".')
    return parser(fpath, config)
