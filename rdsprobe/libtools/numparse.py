# numparse.py
#
# (c) 2023 rdsprobe authors
#

import re

_NUMBER = re.compile(r'^(?P<digits>[0-9]+|0[xX][0-9a-fA-F]+)(?P<suffix>[kKmMgG]?)$')
_SHIFTS = {'': 0, 'k': 10, 'm': 20, 'g': 30}


def parse_long(text: str) -> int:
    """
    Parses a non-negative integer the way strtoull(text, 0) does, with an optional
    binary k/m/g suffix: '0x10' -> 16, '010' -> 8, '2k' -> 2048.
    Raises ValueError for anything else.
    """
    match = _NUMBER.match(text.strip())
    if not match:
        raise ValueError(f'Not a number: {text!r}')
    digits = match.group('digits')
    if digits[:2].lower() == '0x':
        value = int(digits, 16)
    elif len(digits) > 1 and digits.startswith('0'):
        value = int(digits, 8)
    else:
        value = int(digits, 10)
    return value << _SHIFTS[match.group('suffix').lower()]
