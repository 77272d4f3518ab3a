"""Name helpers used to correlate variants with schema metadata.

``full_name`` is the schema reference of a variant, ``simple_name`` is what
discriminator values are derived from. The remaining helpers are ready-made
``name_to_discriminator`` transforms for ``add_discriminator``.
"""

import re

_WORD_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


def full_name(tp: type) -> str:
    """Fully-qualified name of a type, e.g. ``app.errors.UserNotFound``."""
    return f"{tp.__module__}.{tp.__qualname__}"


def simple_name(name: str) -> str:
    """Last dotted segment of a qualified name."""
    return name.rsplit(".", 1)[-1]


def identity(name: str) -> str:
    return name


def kebab_case(name: str) -> str:
    """``UserNotFound`` -> ``user-not-found``, ``HTTPError`` -> ``http-error``."""
    return _WORD_BOUNDARY.sub("-", name).lower()


def snake_case(name: str) -> str:
    """``UserNotFound`` -> ``user_not_found``."""
    return _WORD_BOUNDARY.sub("_", name).lower()
