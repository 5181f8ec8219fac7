import os

MIN_COLUMN_WIDTH = 8

FIELD_SEPARATOR = ' '
LINE_TERMINATOR = '\n'

_TRUTHY = ('1', 'true', 'yes', 'on')

# Raise on rows whose cell count differs from the header count instead of
# silently truncating them.
STRICT_ROW_ARITY = os.environ.get('MONOTAB_STRICT_ROW_ARITY', '').strip().lower() in _TRUTHY
