# Copyright 2018-present Network Optix, Inc. Licensed under MPL 2.0: www.mozilla.org/MPL/2.0/
import doctest
import importlib
import logging
import os
import sys
from argparse import ArgumentParser
from pathlib import Path


def main(args):
    parser = ArgumentParser()
    parser.add_argument(
        'path',
        nargs='?',
        default=_repo_root / 'timed_otp',
        help='file or dir to test, default: %(default)s',
        type=lambda v: Path(v).absolute(),
        )
    parsed_args = parser.parse_args(args)
    if os.getenv('DRY_RUN'):
        _logger.info("Dry run: would run doctests in %s", parsed_args.path)
        return 0
    runner = doctest.DocTestRunner()
    finder = doctest.DocTestFinder()
    paths = [parsed_args.path] if parsed_args.path.is_file() else sorted(parsed_args.path.rglob('*.py'))
    for path in paths:
        if path.name == '__main__.py':
            _logger.debug("Skip entry point: %s", path)
            continue
        module = importlib.import_module(_file_to_module(path))
        for test in finder.find(module):
            if test.examples:
                runner.run(test)
    results = runner.summarize(verbose=True)
    if results.failed > 0:
        return 10
    else:
        return 0


def _file_to_module(path: Path):
    path = path.relative_to(_repo_root)
    if path.name == '__init__.py':
        path = path.parent
    return '.'.join(path.with_suffix('').parts)


_repo_root = Path(__file__).parent.parent
assert str(_repo_root) in sys.path

_logger = logging.getLogger(__name__)

if __name__ == '__main__':
    exit(main(sys.argv[1:]))
