import argparse
import logging
import sys

from errors import SplitError, SplitException
from settings import LOG_LEVEL
from splitter import run


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message):
        raise SplitException(SplitError.InvalidArgs, message)


def main(argv=None) -> int:
    logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s - %(levelname)s - %(message)s")

    parser = _ArgumentParser(description='Split PDFs into page ranges described by a JSON configuration.')
    parser.add_argument('config', help='Path to the JSON split configuration')

    try:
        args = parser.parse_args(argv)
    except SplitException as e:
        parser.print_usage(sys.stderr)
        return int(e.error)

    return int(run(args.config))

if __name__ == '__main__':
    sys.exit(main())
