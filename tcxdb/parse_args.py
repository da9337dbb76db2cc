import json
import logging
import sys
from argparse import ArgumentParser, Namespace
from typing import List, Optional, Tuple

from tcxdb.aggregate import compute_heart_rates
from tcxdb.config import Config
from tcxdb.df_utils import laps_dataframe
from tcxdb.exceptions import TcxdbError
from tcxdb.json_utils import TcxJSONEncoder
from tcxdb.logger import get_logger
from tcxdb.serialize.create import export_json
from tcxdb.serialize.parse import parse_file, read_file


def handle_universal_options(ns: Namespace) -> Tuple[Config, logging.Logger]:
    """Handle "universal" options (options that apply across all
    commands), such as debug mode or specifying the config file to use.
    """
    config = Config(ns.config)
    if ns.debug:
        log_level = logging.DEBUG
        file_level = logging.DEBUG
    else:
        log_level = logging.WARNING
        file_level = None
    logger = get_logger(file_level=file_level, console_level=log_level, config=config)
    logger.info(f'Loaded configuration from {ns.config or "defaults"}.')
    return config, logger


def to_json(ns: Namespace):
    """Parse a TCX file and export it to JSON."""
    config, logger = handle_universal_options(ns)
    logger.debug('Running "tojson" command.')
    tcx = read_file(ns.infile, config)
    if ns.heart_rates or config.compute_heart_rates:
        compute_heart_rates(tcx)
    export_json(tcx, ns.outfile, config)


def summary(ns: Namespace):
    """Print a summary of each activity in a TCX (or exported JSON)
    file.
    """
    config, logger = handle_universal_options(ns)
    logger.debug('Running "summary" command.')
    tcx = parse_file(ns.infile, config)
    compute_heart_rates(tcx)
    activities = tcx.activities.activities if tcx.activities is not None else []
    if ns.json:
        data = [{'sport': a.sport, 'id': a.id, 'laps': laps_dataframe(a).reset_index().to_dict('records')}
                for a in activities]
        print(json.dumps(data, cls=TcxJSONEncoder, indent=config.json_indent))
        return
    if not activities:
        print('No activities recorded.')
    for activity in activities:
        print(f'{activity.sport} activity {activity.id}: {len(activity.laps)} lap(s)')
        if activity.laps:
            print(laps_dataframe(activity).to_string())


def mk_config(ns: Namespace):
    """Create a new configuration by taking the given (or default)
    configuration, making the specified changes and saving the .ini file
    to the given location.
    """
    config, logger = handle_universal_options(ns)
    logger.debug('Running "mkconfig" command.')
    ns_dict = vars(ns)
    out_file = ns_dict.pop('outfile')
    for field in Config.__dataclass_fields__:
        if (k := ns_dict.get(field)) is not None:
            logger.debug(f'Setting config value "{field}" to "{k}".')
            setattr(config, field, k)
    config.to_file(fpath=out_file)


def get_parser() -> ArgumentParser:
    parser = ArgumentParser(description='Parse TCX activity files.')
    subparsers = parser.add_subparsers(required=True)

    parser.add_argument('-c', '--config', metavar='FILE', help='Specify the configuration file to be used.')
    parser.add_argument('--debug', action='store_true', help='Debug mode (more verbose output).')

    tojson_subparser = subparsers.add_parser('tojson', description='Convert a TCX file to JSON.')
    tojson_subparser.add_argument('infile', metavar='INFILE', help='The TCX file to read.')
    tojson_subparser.add_argument('outfile', metavar='OUTFILE', help='The JSON file to write.')
    tojson_subparser.add_argument('--heart-rates', action='store_true',
                                  help='Compute average and maximum heart rate for each lap before exporting.')
    tojson_subparser.set_defaults(func=to_json)

    summary_subparser = subparsers.add_parser('summary', description='Summarise the activities in a file.')
    summary_subparser.add_argument('infile', metavar='INFILE', help='The TCX or JSON file to read.')
    summary_subparser.add_argument('--json', action='store_true', help='Print the summary as JSON.')
    summary_subparser.set_defaults(func=summary)

    mkconf_subparser = subparsers.add_parser('mkconfig', help='Create a new configuration file, by taking the default '
                                                              '(or provided) config file, making the specified changes '
                                                              'and saving to the given location.')
    for field in Config.__dataclass_fields__:
        mkconf_subparser.add_argument(f'--{field}')
    mkconf_subparser.add_argument('outfile', metavar='FILE', nargs='?',
                                  help='The file to save the new configuration to.')
    mkconf_subparser.set_defaults(func=mk_config)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    ns = get_parser().parse_args(argv)
    try:
        ns.func(ns)
    except TcxdbError as e:
        print(f'Error: {e}', file=sys.stderr)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
