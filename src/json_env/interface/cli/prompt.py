from __future__ import annotations

"""
Terminal Confirmation Prompt.

Asks on stderr and reads from stdin so that stdout stays reserved for the
export statements consumed by 'eval'.
"""

import sys


def confirm(prompt: str) -> bool:
    """
    Ask a yes/no question. Anything but 'y'/'yes' means no.

    Returns False without asking when stdin is not a terminal.
    """
    if not sys.stdin or not sys.stdin.isatty():
        return False

    sys.stderr.write(f"{prompt} [y/N] ")
    sys.stderr.flush()
    answer = sys.stdin.readline()
    return answer.strip().lower() in ("y", "yes")
