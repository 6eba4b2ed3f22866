"""
REPL session driver

Reads one expression per line, prints "<decimal> (<hex>)" on success, or a
caret under the failing column followed by the error on failure:

    > 2 + )
          ^
    Parse error: Unexpected ')'
"""

import logging
import sys
from typing import Callable, Optional, TextIO

from .errors import BincalcError
from .evaluator import Evaluator, EvaluatorConfig
from .values import format_result


logger = logging.getLogger(__name__)

PROMPT = "> "
EXIT_COMMANDS = ('exit', 'quit')


def format_error(error: BincalcError, indent: int = len(PROMPT)) -> str:
    """
    Render an error as a caret line plus message

    Args:
        error: The evaluation error
        indent: Columns before the echoed input (the prompt width)

    Returns:
        Two lines: the caret aligned under error.pos, then "<kind>: <message>"
    """
    pos = error.pos or 0
    return f"{' ' * (indent + pos)}^\n{error.kind}: {error.message}"


class Session:
    """An interactive session under one encoding"""

    def __init__(self, config: EvaluatorConfig,
                 out: Optional[TextIO] = None, err: Optional[TextIO] = None):
        self.evaluator = Evaluator(config)
        self.out = out
        self.err = err

    def handle_input(self, line: str) -> bool:
        """
        Evaluate one line and report the outcome

        Returns:
            True on success, False if an error was reported
        """
        try:
            value = self.evaluator.evaluate(line)
        except BincalcError as e:
            print(format_error(e), file=self.err or sys.stderr)
            return False
        print(format_result(value), file=self.out or sys.stdout)
        return True

    def run(self, read_line: Callable[[str], str] = input) -> int:
        """
        Loop until end of input or an exit command

        Args:
            read_line: Prompting line reader

        Returns:
            Process exit status
        """
        logger.debug("session started in %s mode", self.evaluator.encoding.name)
        while True:
            try:
                line = read_line(PROMPT)
            except EOFError:
                break
            except KeyboardInterrupt:
                print(file=self.out or sys.stdout)
                continue

            line = line.rstrip('\r\n')
            if not line.strip():
                continue
            if line.strip() in EXIT_COMMANDS:
                break
            self.handle_input(line)
        return 0


__all__ = ['Session', 'format_error', 'PROMPT', 'EXIT_COMMANDS']
