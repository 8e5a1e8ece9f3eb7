""" Tool to try out display conditions from the command line

e.g. nameplate_check "%level% > 10 && %balance% >= 1.000,50" -p level=12 -p balance=2500
"""

import sys
import argparse
import contextlib
import logging
from typing import Dict, List, Optional, Sequence

from nameplate import config, conditions
from nameplate.placeholders import PercentPlaceholderResolver

def parse_placeholders(values:Sequence[str]) -> Dict[str, str]:
    placeholders:Dict[str, str] = {}
    for value in values:
        name, sep, text = value.partition("=")
        if not sep or not name:
            raise ValueError(f'placeholder must look like NAME=VALUE, got "{value}"')
        placeholders[name] = text
    return placeholders

def main(argv:Optional[List[str]]=None) -> None:
    logging.basicConfig(stream=sys.stderr, level=logging.INFO)
    logger = logging.getLogger(__name__)

    with contextlib.ExitStack() as context_stack:

        parser = argparse.ArgumentParser(description="evaluate display conditions")
        parser.add_argument("expression", nargs="+", type=str,
                help="conditions to evaluate")
        parser.add_argument("-p", "--placeholder", action="append", default=[],
                help="placeholder value as NAME=VALUE, fills %%NAME%% in expressions")
        parser.add_argument("-c", "--config", nargs="?", type=str, default=None,
                help="toml file overriding the built-in config")
        parser.add_argument("-v", "--verbose", action="store_true",
                help="log at debug level")

        args = parser.parse_args(argv)

        if args.verbose:
            logging.getLogger("nameplate").setLevel(logging.DEBUG)

        if args.config:
            config.load_config(context_stack.enter_context(open(args.config, "rt")))

        try:
            placeholders = parse_placeholders(args.placeholder)
        except ValueError as e:
            parser.error(str(e))

        evaluator = conditions.create_evaluator(PercentPlaceholderResolver())
        logger.debug(f'evaluating {len(args.expression)} expressions with {placeholders}')

        for expression in args.expression:
            result = evaluator.evaluate(conditions.ConditionalModifier(expression), placeholders)
            print(f'{"true" if result else "false"}\t{expression}')

if __name__ == "__main__":
    main()
