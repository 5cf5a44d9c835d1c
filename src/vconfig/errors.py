# -*- encoding: utf-8 -*-
# @File   : errors.py
# @Time   : 2024/11/02 21:14:05
# @Author : Kariko Lin

"""Exceptions raised by vconfig.

Success returns a value, failure raises. The lookups which accept a
`default` attach it to the raised `NotFoundError`, so callers wanting the
fallback do:

    ```python
    try:
        val = doc.get_single_value('net', 'port', '8080')
    except NotFoundError as e:
        val = e.default
    ```
"""

__all__ = [
    'VConfigError', 'ParseError', 'SerializeError',
    'NotFoundError', 'VariableNotFoundError', 'SectionNotFoundError',
    'MultipleValuesError', 'MultipleSectionsError', 'DuplicateSectionError'
]


class VConfigError(Exception):
    """Base of every error vconfig raises."""


class ParseError(VConfigError, ValueError):
    """Malformed line met while parsing. Parsing stops at the first one."""

    def __init__(self, line: int, message: str, content: str | None = None):
        self.line = line
        self.message = message
        self.content = content
        if content is None:
            super().__init__(f'{message} at line {line}')
        else:
            super().__init__(f'Line {line}: {content}\n{message}')


class SerializeError(VConfigError, ValueError):
    """Content that would not read back the same once written."""


class NotFoundError(VConfigError, KeyError):
    """Requested variable or section does not exist."""

    def __init__(self, message: str, default: str | None = None):
        super().__init__(message)
        self.default = default

    # KeyError would repr() the message.
    def __str__(self) -> str:
        return str(self.args[0])


class VariableNotFoundError(NotFoundError):
    pass


class SectionNotFoundError(NotFoundError):
    pass


class MultipleValuesError(VConfigError, ValueError):
    """A single value was asked for, but the variable holds more."""


class MultipleSectionsError(VConfigError, ValueError):
    """A single section was asked for, but several share the name."""


class DuplicateSectionError(VConfigError, ValueError):
    """This very section instance is already part of the document."""
