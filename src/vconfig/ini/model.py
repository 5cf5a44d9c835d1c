# -*- encoding: utf-8 -*-
# @File   : model.py
# @Time   : 2024/11/02 22:05:51
# @Author : Kariko Lin

"""
Multi-valued INI structure.

Unlike `configparser`, keys may repeat (values pile up in order) and so may
sections (every `[X]` is an instance of its own):

    ```ini
    # before any header: the global section.
    key = val

    [section]
    key233 = val666
    key233 = val114514
    # another section, also named "section".
    [section]
    key233 = val1919
    ```

Here the first `[section]` holds `['val666', 'val114514']` for `key233`.
Comments take a whole line; `#` inside a value is part of the value.

Only the global section is special: adding a second one merges it into
the first.
"""

import logging
from collections.abc import (
    Iterable, Iterator, Mapping, MutableMapping, Sequence
)
from os import PathLike
from typing import Self

from ..errors import (
    ParseError, SerializeError, VariableNotFoundError, SectionNotFoundError,
    MultipleValuesError, MultipleSectionsError, DuplicateSectionError
)
from ..fileio import read_text, write_text

__all__ = ['GLOBAL_SECTION', 'Section', 'Document']

logger = logging.getLogger(__name__)

# a header line can never contain a line break,
# so no `[...]` in a file is able to name this one.
GLOBAL_SECTION = '\n__globalvars__'


class Section(MutableMapping[str, list[str]]):
    """Named mapping of variables to their *ordered* values.

    A variable, once present, always has at least one value.
    Setting an empty value list removes the variable instead.

    Lists handed in or out are copies. Mutate via `set_values()`,
    `add_values()` or item assignment. A bare string given as values
    counts as ONE value: `sec["port"] = "8080"` stores `["8080"]`.

    Two sections are equal when both name and content are.
    """

    def __init__(
        self, name: str, /,
        pairs: Mapping[str, Iterable[str]] | None = None
    ) -> None:
        self._name = name
        self._data: dict[str, list[str]] = {}
        if pairs:
            for k, v in pairs.items():
                self.add_values(k, v)

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_global(self) -> bool:
        return self._name == GLOBAL_SECTION

    def set_values(self, name: str, values: Iterable[str]) -> None:
        """Replace whatever `name` held with `values`."""
        values = [values] if isinstance(values, str) else list(values)
        if values:
            self._data[name] = values
        else:
            self._data.pop(name, None)

    def add_values(self, name: str, values: Iterable[str]) -> None:
        """Append `values` to `name`, after the existing ones."""
        if isinstance(values, str):
            values = [values]
        if name in self._data:
            self._data[name].extend(values)
        else:
            self.set_values(name, values)

    def get_values(self, name: str) -> list[str]:
        if name not in self._data:
            raise VariableNotFoundError(
                f"Variable '{name}' does not exist in this section")
        return list(self._data[name])

    def get_single_value(self, name: str, default: str = '') -> str:
        """Get the only value of `name`.

        Raises:
            VariableNotFoundError: `name` is absent. `default` rides
                along as the `default` attribute of the error.
            MultipleValuesError: `name` holds more than one value.
        """
        if name not in self._data:
            raise VariableNotFoundError(
                f"Variable '{name}' does not exist in this section",
                default)
        values = self._data[name]
        if len(values) > 1:
            raise MultipleValuesError(
                f"Variable '{name}' has multiple values")
        return values[0]

    def get_variables(self) -> list[str]:
        """Variable names, in the order they were first added."""
        return list(self._data)

    def duplicate(self) -> 'Section':
        """Deep copy. The copy shares no value list with `self`."""
        dup = Section(self._name)
        dup._data = {k: list(v) for k, v in self._data.items()}
        return dup

    __copy__ = duplicate

    def __deepcopy__(self, memo: dict) -> 'Section':
        return self.duplicate()

    def merge(self, other: 'Section') -> None:
        """`add_values()` every variable of `other` into `self`.

        The name of `self` is kept.
        """
        # snapshot first, `other` may be `self`.
        for k, v in [(k, list(v)) for k, v in other._data.items()]:
            self.add_values(k, v)

    def clear_content(self) -> None:
        """Drop all variables, keep the name."""
        self._data = {}

    def to_string(self, delimiter: str = '=', comment: str = '#') -> str:
        """One `key=value` line per value. No header for the global section.

        Raises `SerializeError` for what `Document.from_string()` would not
        read back as is: empty or padded keys and values, a delimiter in
        the key, line breaks, or a line looking like a comment or header.
        """
        if not self.is_global and (not self._name or '\n' in self._name):
            raise SerializeError(
                f'Section name {self._name!r} cannot be written as header')
        lines = [] if self.is_global else [f'[{self._name}]']
        for k, values in self._data.items():
            for v in values:
                line = f'{k}{delimiter}{v}'
                if (not k or k != k.strip() or delimiter in k
                        or not v or v != v.strip() or '\n' in line
                        or line.startswith(comment)
                        or (line[0] == '[' and line[-1] == ']')):
                    raise SerializeError(
                        f'[{self._name}] {k!r} = {v!r} cannot be written')
                lines.append(line)
        return '\n'.join(lines)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Section):
            return NotImplemented
        return self._name == other._name and self._data == other._data

    __hash__ = None

    def __getitem__(self, key: str) -> list[str]:
        return self.get_values(key)

    def __setitem__(self, key: str, value: Iterable[str]) -> None:
        self.set_values(key, value)

    def __delitem__(self, key: str) -> None:
        if key not in self._data:
            raise VariableNotFoundError(
                f"Variable '{key}' does not exist in this section")
        del self._data[key]

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        name = 'GLOBAL' if self.is_global else self._name
        return '[%s] { .cnt = %d }' % (name, len(self._data))


class Document(Sequence[Section]):
    """Ordered sections of one INI document (or of several merged ones).

    Sections sharing a name stay separate instances, except the global
    one, see `add_section()`. `section in doc` tests identity, not name.
    """

    def __init__(self, sections: Iterable[Section] = ()) -> None:
        self._sections: list[Section] = []
        for i in sections:
            self.add_section(i)

    # ---- parsing ----

    @classmethod
    def from_string(
        cls, text: str, *,
        comment: str = '#', delimiter: str = '='
    ) -> Self:
        """Parse `text`.

        Raises `ParseError` on the first malformed line,
        no partial document is returned.
        """
        doc = cls()
        current = doc.new_section(GLOBAL_SECTION)
        for idx, line in enumerate(text.split('\n'), 1):
            line = line.strip()
            if not line or line.startswith(comment):
                continue
            if line[0] == '[' and line[-1] == ']':
                if len(line) == 2:
                    raise ParseError(idx, 'Empty section')
                current = doc.new_section(line[1:-1])
                continue
            if delimiter not in line:
                raise ParseError(idx, 'Missing equal sign?', line)
            key, val = (i.strip() for i in line.split(delimiter, 1))
            if not key:
                raise ParseError(
                    idx, 'Zero-length variable names are not allowed', line)
            if not val:
                raise ParseError(
                    idx, 'Zero-length values are not allowed', line)
            current.add_values(key, [val])
        logger.debug('Parsed %d section(s)', len(doc))
        return doc

    def read_string(
        self, text: str, *,
        comment: str = '#', delimiter: str = '='
    ) -> None:
        """Parse `text` and add its sections to `self`.

        On `ParseError`, `self` is left as it was.
        """
        parsed = self.from_string(text, comment=comment, delimiter=delimiter)
        for i in list(parsed):
            self.add_section(i)

    @classmethod
    def from_file(
        cls, path: str | PathLike, encoding: str | None = None, *,
        comment: str = '#', delimiter: str = '='
    ) -> Self:
        """Read and parse the file at `path`. Encoding is detected if None."""
        return cls.from_string(
            read_text(path, encoding), comment=comment, delimiter=delimiter)

    # ---- building ----

    def add_section(self, section: Section) -> Section:
        """Append `section`, and return the section now holding its content.

        That is `section` itself, except when adding a global section while
        the document has one already: the content is merged into the
        existing global section, which is returned.
        """
        if section in self:
            raise DuplicateSectionError(
                'Section already exists in document. '
                'Duplicate section before adding an existing one')
        if section.is_global and (gsec := self.global_section) is not None:
            logger.debug('Merging %d variable(s) into global section',
                         len(section))
            gsec.merge(section)
            return gsec
        self._sections.append(section)
        return section

    def new_section(self, name: str) -> Section:
        """Create an empty section `name` and add it.

        `''` names the global section.
        """
        return self.add_section(Section(name or GLOBAL_SECTION))

    def merge(self, other: 'Document') -> None:
        """Add a duplicate of every section of `other`."""
        for i in list(other):
            self.add_section(i.duplicate())

    # ---- queries ----

    @property
    def global_section(self) -> Section | None:
        for i in self._sections:
            if i.is_global:
                return i
        return None

    def get_sections(self, name: str) -> list[Section]:
        """All sections called `name`, in document order.

        `''` asks for the global section.
        """
        name = name or GLOBAL_SECTION
        ret = [i for i in self._sections if i.name == name]
        if not ret:
            shown = 'GLOBAL' if name == GLOBAL_SECTION else name
            raise SectionNotFoundError(
                f"Section '{shown}' does not exist in this document")
        return ret

    def get_single_value(
        self, section_name: str, var_name: str, default: str = ''
    ) -> str:
        """See `Section.get_single_value()`.

        Raises `MultipleSectionsError` if `section_name` is ambiguous.
        """
        sections = self.get_sections(section_name)
        if len(sections) > 1:
            raise MultipleSectionsError(
                f"Multiple sections with name '{section_name}'")
        return sections[0].get_single_value(var_name, default)

    def get_sections_by_var(
        self, section_name: str, var_name: str, var_value: str
    ) -> list[Section]:
        """Sections called `section_name` where `var_name` is `var_value`.

        With `section_name=''`, look through every section of the document.

        Every candidate MUST hold `var_name` exactly once: otherwise the
        error of `Section.get_single_value()` is raised as-is, rather
        than the candidate being skipped.
        """
        candidates = (self.get_sections(section_name)
                      if section_name else self._sections)
        ret = [i for i in candidates
               if i.get_single_value(var_name) == var_value]
        if not ret:
            raise SectionNotFoundError(
                f'Cannot find section {section_name} '
                f'where {var_name}={var_value}')
        return ret

    # ---- output ----

    def to_string(
        self, *,
        delimiter: str = '=', blank_lines: int = 1, comment: str = '#'
    ) -> str:
        """Serialize. The global section always goes first, without header.

        Raises `SerializeError`, see `Section.to_string()`.
        """
        blocks = []
        # an empty global section leaves no trace.
        if (gsec := self.global_section) is not None and len(gsec):
            blocks.append(gsec.to_string(delimiter, comment))
        blocks.extend(i.to_string(delimiter, comment)
                      for i in self._sections if not i.is_global)
        if not blocks:
            return ''
        return ('\n' * (blank_lines + 1)).join(blocks) + '\n'

    def to_file(
        self, path: str | PathLike, encoding: str = 'utf-8', *,
        file_mode: int = 0o666, delimiter: str = '=', blank_lines: int = 1,
        comment: str = '#'
    ) -> None:
        """Write to `path`. Not atomic, see `vconfig.fileio`."""
        text = self.to_string(
            delimiter=delimiter, blank_lines=blank_lines, comment=comment)
        write_text(path, text, encoding, file_mode)

    # ---- sequence protocol ----

    def __getitem__(self, index):
        return self._sections[index]

    def __len__(self) -> int:
        return len(self._sections)

    def __iter__(self) -> Iterator[Section]:
        return iter(self._sections)

    def __contains__(self, section: object) -> bool:
        return any(i is section for i in self._sections)

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return '<Document { .sections = %d }>' % len(self._sections)
