"""Configuration, loaded from an optional .ini file (section
"general") and keyword overrides.
"""
import os
import sys
from configparser import ConfigParser
from dataclasses import dataclass
from typing import Optional

import appdirs

from tcxdb.exceptions import ConfigError
from tcxdb.metadata import APP_NAME

DEFAULTS = {
    'json_indent': '4',
    'huge_tree': 'yes',
    'compute_heart_rates': 'no',
    'log_file': ''
}


@dataclass(init=False)
class Config:
    # Add these as fields so that they are compared in __eq__
    json_indent: int
    huge_tree: bool
    compute_heart_rates: bool
    log_file: str

    def __init__(self, ini_fpath: Optional[str] = None, **kwargs):
        self.ini_fpath = ini_fpath
        self.kwargs = kwargs
        self.load()

    def read_file(self, ini_fpath: Optional[str]):
        parser = ConfigParser(interpolation=None)
        parser.read_dict({'general': DEFAULTS})
        if ini_fpath is not None:
            if not parser.read(ini_fpath):
                raise ConfigError(f'Could not read configuration file "{ini_fpath}".')

        general = parser['general']
        self.json_indent = general.getint('json_indent')
        self.huge_tree = general.getboolean('huge_tree')
        self.compute_heart_rates = general.getboolean('compute_heart_rates')
        if not general['log_file']:
            self.log_file = os.path.join(appdirs.user_log_dir(APP_NAME), f'{APP_NAME}.log')
        else:
            self.log_file = general['log_file']

    def load(self, fpath: Optional[str] = None):
        """Load values from the given file and keyword arguments."""
        self.read_file(fpath or self.ini_fpath)
        for k in self.kwargs:
            if k not in self.__dataclass_fields__:
                raise TypeError(f'Unknown configuration option "{k}".')
            setattr(self, k, self.kwargs[k])

    def to_configparser(self) -> ConfigParser:
        """Save the current configuration options to a ConfigParser
        object and return it.
        """
        parser = ConfigParser(interpolation=None)
        parser.add_section('general')
        for _field in self.__dataclass_fields__:
            value = getattr(self, _field)
            if isinstance(value, bool):
                value = 'yes' if value else 'no'
            parser['general'][_field] = str(value)
        return parser

    def to_file(self, fpath: Optional[str] = None):
        """Save the current configuration options to `fpath` as a .ini
        file. If `fpath` is not provided, print to stdout.
        """
        parser = self.to_configparser()
        if fpath:
            with open(fpath, 'w') as f:
                parser.write(f)
        else:
            parser.write(sys.stdout)
