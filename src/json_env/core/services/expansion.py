from __future__ import annotations

"""
Variable Expansion Engine.

Literal '$NAME' substitution against an environment snapshot. This is not a
shell expander: no braces, defaults or escapes. Substitution is a single
regex pass, so replaced text is never re-scanned, and longer names are tried
first so '$FOOBAR' is not consumed by '$FOO'.
"""

import re
from typing import Mapping


def expand(value: str, env: Mapping[str, str]) -> str:
    """
    Replace every '$name' occurrence for each defined name in env.

    References to undefined names are left untouched.

    Args:
        value: Coerced string value.
        env: Environment snapshot used for lookups.

    Returns:
        str: The expanded value (identical when nothing matches).
    """
    if "$" not in value:
        return value

    names = [name for name in env if name and f"${name}" in value]
    if not names:
        return value

    names.sort(key=lambda n: (-len(n), n))
    pattern = re.compile(r"\$(" + "|".join(re.escape(n) for n in names) + ")")
    return pattern.sub(lambda m: env[m.group(1)], value)
