"""Fixed-width table builder.

A table is built in two phases. :class:`Table` only accepts headers;
adding a row (or calling :meth:`Table.end_header`) returns a
:class:`RowTable`, which only accepts rows and can be rendered::

    table = (Table()
             .header('Name')
             .header(('Age', Alignment.RIGHT))
             .row(Row().cell('Alice').cell('20'))
             .row(Row().cell('Bob').cell('30')))
    print(table)

Every call returns a new instance; the receiver is never modified.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field, replace

from monotab import constants
from monotab.util.ansi import TableError, width

logger = logging.getLogger(__name__)


class Alignment(enum.Enum):
    LEFT = 'left'
    RIGHT = 'right'
    CENTER = 'center'

    @classmethod
    def of(cls, value):
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ValueError(f'Unknown alignment {value!r}') from None


class RowArityMismatchError(TableError):
    def __init__(self, expected, actual):
        self.expected = expected
        self.actual = actual
        super().__init__(f'Row has {actual} cells, table has {expected} columns')


@dataclass(frozen=True)
class Header:
    text: str
    alignment: Alignment = Alignment.LEFT

    def __post_init__(self):
        object.__setattr__(self, 'alignment', Alignment.of(self.alignment))

    @classmethod
    def of(cls, value):
        """Convert a header, a plain string or a ``(text, alignment)`` pair."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            return cls(value)
        if isinstance(value, tuple) and len(value) == 2:
            text, alignment = value
            return cls(str(text), Alignment.of(alignment))
        raise TypeError(f'Cannot make a header from {value!r}')


class Row:
    def __init__(self, *cells):
        self._cells = tuple(str(cell) for cell in cells)

    @classmethod
    def of(cls, value):
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            raise TypeError(f'Expected a Row or an iterable of cells, got {value!r}')
        return cls(*value)

    @property
    def cells(self):
        return self._cells

    def cell(self, text) -> Row:
        return Row(*self._cells, text)

    def __len__(self):
        return len(self._cells)

    def __iter__(self):
        return iter(self._cells)

    def __eq__(self, other):
        if not isinstance(other, Row):
            return NotImplemented
        return self._cells == other._cells

    def __hash__(self):
        return hash(self._cells)

    def __repr__(self):
        return f'Row{self._cells!r}'


@dataclass(frozen=True)
class _TableState:
    headers: tuple = ()
    column_widths: tuple = ()
    # Rows may be shared with later snapshots; only the first row_count belong here.
    row_list: list = field(default_factory=list, compare=False, repr=False)
    row_count: int = 0
    skip_header: bool = False
    strict_arity: bool = field(default=False, compare=False)

    @property
    def rows(self):
        return tuple(self.row_list[:self.row_count])

    def with_header(self, header):
        return replace(self,
                       headers=self.headers + (header,),
                       column_widths=self.column_widths + (width(header.text),))

    def widen(self, row):
        """Column widths after accounting for ``row``."""
        if self.headers and len(row) != len(self.headers):
            if self.strict_arity:
                raise RowArityMismatchError(len(self.headers), len(row))
            logger.debug(f'Row arity {len(row)} differs from {len(self.headers)} columns, '
                         'extra cells are ignored')
        widths = list(self.column_widths)
        for i, cell in zip(range(len(widths)), row):
            widths[i] = max(widths[i], width(cell))
        return tuple(widths)

    def with_row(self, row, widths):
        rows = self.row_list
        if len(rows) != self.row_count:
            # An older snapshot is branching off.
            rows = rows[:self.row_count]
        rows.append(row)
        return replace(self, column_widths=widths, row_list=rows, row_count=self.row_count + 1)


def pad(text: str, target_width: int, alignment: Alignment) -> str:
    """Pad ``text`` to ``target_width`` visual columns, never less than 8."""
    target_width = max(target_width, constants.MIN_COLUMN_WIDTH)
    padding = max(target_width - width(text), 0)
    if alignment is Alignment.LEFT:
        return text + ' ' * padding
    if alignment is Alignment.RIGHT:
        return ' ' * padding + text
    if alignment is Alignment.CENTER:
        left = padding // 2
        return ' ' * left + text + ' ' * (padding - left)
    raise ValueError(f'Unknown alignment {alignment!r}')


def _format_line(fields):
    return ''.join(text + constants.FIELD_SEPARATOR for text in fields) + constants.LINE_TERMINATOR


def render(state: _TableState) -> str:
    lines = []
    if not state.skip_header:
        lines.append(_format_line(pad(header.text, w, header.alignment)
                                  for header, w in zip(state.headers, state.column_widths)))
    # Data cells are always left aligned, whatever the header says.
    for row in state.rows:
        lines.append(_format_line(pad(cell, w, Alignment.LEFT)
                                  for cell, w in zip(row, state.column_widths)))
    return ''.join(lines)


class Table:
    """Header phase of a table."""

    def __init__(self, *, strict_arity=None):
        if strict_arity is None:
            strict_arity = constants.STRICT_ROW_ARITY
        self._state = _TableState(strict_arity=strict_arity)

    @classmethod
    def new(cls, **kwargs):
        return cls(**kwargs)

    @classmethod
    def _from_state(cls, state):
        table = cls.__new__(cls)
        table._state = state
        return table

    @property
    def headers(self):
        return self._state.headers

    @property
    def column_widths(self):
        return self._state.column_widths

    def header(self, header) -> Table:
        header = Header.of(header)
        state = self._state.with_header(header)
        logger.debug(f'Declared column {len(state.headers)} `{header.text}`')
        return Table._from_state(state)

    def skip_header(self, skip=True) -> Table:
        return Table._from_state(replace(self._state, skip_header=bool(skip)))

    def end_header(self) -> RowTable:
        logger.debug(f'Header phase ended with {len(self._state.headers)} columns')
        return RowTable._from_state(replace(self._state, row_list=[], row_count=0))

    def row(self, row) -> RowTable:
        # Ending the header phase and accepting the first row is one step.
        row = Row.of(row)
        widths = self._state.widen(row)
        logger.debug(f'Header phase ended with {len(self._state.headers)} columns')
        return RowTable._from_state(replace(self._state, column_widths=widths,
                                            row_list=[row], row_count=1))

    def __repr__(self):
        return f'<Table headers={[h.text for h in self.headers]!r}>'


class RowTable:
    """Row phase of a table. Headers are frozen."""

    @classmethod
    def _from_state(cls, state):
        table = cls.__new__(cls)
        table._state = state
        return table

    @property
    def headers(self):
        return self._state.headers

    @property
    def column_widths(self):
        return self._state.column_widths

    @property
    def rows(self):
        return self._state.rows

    @property
    def skips_header(self):
        return self._state.skip_header

    def row(self, row) -> RowTable:
        row = Row.of(row)
        widths = self._state.widen(row)
        return RowTable._from_state(self._state.with_row(row, widths))

    def render(self) -> str:
        return render(self._state)

    def __len__(self):
        return self._state.row_count

    def __str__(self):
        return self.render()

    def __repr__(self):
        return f'<RowTable headers={[h.text for h in self.headers]!r} rows={len(self)}>'
