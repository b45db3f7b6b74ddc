"""
Terminal input and output for the platform CLI tool.

Ordinary messages go to the primary stream (stdout), warnings and errors to
the secondary stream (stderr). Secrets are read through an injectable
reader so tests can feed them from memory without a real terminal.
"""

import getpass
import sys
from typing import List, Optional, TextIO

from platform_manager_client.protocols import SecretReader


class GetpassSecretReader:
    """Reads a secret from the controlling terminal with echo disabled."""

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self.stream = stream

    def __call__(self) -> str:
        return getpass.getpass(prompt="", stream=self.stream)


class StreamSecretReader:
    """
    Reads a secret line from a plain stream (pipes and tests).

    Like getpass, it ends the prompt line on ``out`` without echoing the value.
    """

    def __init__(self, stream: TextIO, out: Optional[TextIO] = None) -> None:
        self.stream = stream
        self.out = out

    def __call__(self) -> str:
        line = self.stream.readline().rstrip("\r\n")
        if self.out is not None:
            self.out.write("\n")
        return line


class TerminalUI:
    """Implementation of the OutputSink protocol over text streams."""

    def __init__(
        self,
        out: Optional[TextIO] = None,
        err: Optional[TextIO] = None,
        stdin: Optional[TextIO] = None,
        secret_reader: Optional[SecretReader] = None,
    ) -> None:
        """
        Initialize the terminal UI.

        Args:
            out: Primary stream (default: sys.stdout)
            err: Secondary stream for warnings and errors (default: sys.stderr)
            stdin: Input stream for confirmations (default: sys.stdin)
            secret_reader: Reader used for secret prompts; defaults to getpass
                when reading from the real stdin, otherwise to ``stdin`` itself
        """
        self.out = out or sys.stdout
        self.err = err or sys.stderr
        self.stdin = stdin or sys.stdin
        if secret_reader is None:
            if self.stdin is sys.stdin:
                secret_reader = GetpassSecretReader(self.out)
            else:
                secret_reader = StreamSecretReader(self.stdin, self.out)
        self.secret_reader = secret_reader

    def say(self, message: str) -> None:
        print(message, file=self.out)

    def warn(self, message: str) -> None:
        print(message, file=self.err)

    def display_warnings(self, warnings: List[str]) -> None:
        for warning in warnings:
            self.warn(warning)

    def confirm(self, prompt: str) -> bool:
        """
        Prompt the user for confirmation.

        Only ``y`` or ``yes`` (any case) confirm; a blank answer or end of
        input declines. Nothing beyond the prompt itself is written.
        """
        self.out.write(f"{prompt} ")
        self.out.flush()
        response = self.stdin.readline()
        return response.strip().lower() in ("y", "yes")

    def prompt_secret(self, label: str) -> str:
        self.out.write(label)
        self.out.flush()
        return self.secret_reader().strip()

    def ok(self) -> None:
        print("OK", file=self.out)

    def failed(self, message: str) -> None:
        print("FAILED", file=self.err)
        print(message, file=self.err)

    def failed_with_usage(self, message: str, usage: str) -> None:
        self.failed(message)
        print("", file=self.err)
        print(usage, file=self.err)
