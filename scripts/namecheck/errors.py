"""Exceptions raised by the naming checker.

Only structural problems are exceptions.  Scan warnings, ambiguous
classifications and naming violations are collected as records and end up
in the report.
"""


class NamecheckError(Exception):
    """Base class for fatal checker errors."""


class InvalidRoot(NamecheckError, ValueError):
    """The scan root does not exist, is not a directory or is unreadable."""

    def __init__(self, root, reason):
        self.root = root
        self.reason = reason
        super().__init__(f"{root}: {reason}")


class UnknownKind(NamecheckError, KeyError):
    """A rule table lookup or definition names a kind it does not cover."""

    def __init__(self, kind):
        self.kind = kind
        super().__init__(kind)

    def __str__(self):
        return f"Unknown entity kind: {self.kind!r}"
