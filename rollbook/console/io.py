"""Line-oriented console I/O over text streams (stdin/stdout by default)."""

import sys
from typing import TextIO

from rollbook.core.errors import EndOfInput


class Console:
    """Plain-text prompts out, one input line in. Streams are injectable for tests."""

    def __init__(self, stdin: TextIO | None = None, stdout: TextIO | None = None) -> None:
        self.stdin = stdin if stdin is not None else sys.stdin
        self.stdout = stdout if stdout is not None else sys.stdout

    def print(self, text: str = "") -> None:
        self.stdout.write(text + "\n")

    def ask(self, prompt: str) -> str:
        """Write prompt (no newline) and return the next input line without its line break.

        Raises EndOfInput when the input stream is exhausted.
        """
        self.stdout.write(prompt)
        self.stdout.flush()
        line = self.stdin.readline()
        if line == "":
            raise EndOfInput("console input exhausted")
        return line.rstrip("\r\n")
