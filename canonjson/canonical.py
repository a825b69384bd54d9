"""
Canonical JSON serialization
Deterministic, sorted keys, no whitespace, finite numbers, well-formed strings
"""

from collections.abc import Mapping, Sequence
from typing import Any, Iterable, List, Optional
import logging
import math
import re

from .errors import CanonicalizationError, InvalidNumber, InvalidString, InvalidType
from .values import UNDEFINED, JsonValue, is_transformable

logger = logging.getLogger(__name__)

# Strings at least this long always take the escaping path.
FAST_PATH_MAX_LENGTH = 5000
# Key sets larger than this are sorted with the built-in sort.
INSERTION_SORT_MAX_KEYS = 200
# Largest magnitude an int keeps without rounding through a double.
MAX_SAFE_INTEGER = 2 ** 53

_NEEDS_ESCAPE = re.compile(r'[\x00-\x1f"\\\ud800-\udfff]')
_SURROGATE = re.compile(r'[\ud800-\udfff]')

_SHORT_ESCAPES = {
    '"': '\\"',
    '\\': '\\\\',
    '\b': '\\b',
    '\f': '\\f',
    '\n': '\\n',
    '\r': '\\r',
    '\t': '\\t',
}


def is_well_formed(s: str) -> bool:
    """True if every surrogate in s is part of a high/low pair."""
    if _SURROGATE.search(s) is None:
        return True
    i = 0
    length = len(s)
    while i < length:
        code = ord(s[i])
        if 0xD800 <= code <= 0xDBFF:
            if i + 1 < length and 0xDC00 <= ord(s[i + 1]) <= 0xDFFF:
                i += 2
                continue
            return False
        if 0xDC00 <= code <= 0xDFFF:
            return False
        i += 1
    return True


def escape_string(s: str) -> str:
    """Quote and escape a string the way JSON.stringify does."""
    result = ['"']
    for c in s:
        escaped = _SHORT_ESCAPES.get(c)
        if escaped is not None:
            result.append(escaped)
        elif ord(c) < 0x20:
            result.append(f'\\u{ord(c):04x}')
        else:
            result.append(c)
    result.append('"')
    return ''.join(result)


def encode_string(s: str) -> str:
    """
    Encode a string as a canonical JSON string literal.

    Short strings with nothing to escape are quoted as-is; everything else
    goes through escape_string. Both paths give the same output.
    """
    if not is_well_formed(s):
        raise InvalidString("String contains an unpaired surrogate", s)
    if len(s) < FAST_PATH_MAX_LENGTH and _NEEDS_ESCAPE.search(s) is None:
        return '"' + s + '"'
    if _SURROGATE.search(s) is not None:
        # Paired surrogate code points become the character they encode.
        s = s.encode('utf-16-be', 'surrogatepass').decode('utf-16-be')
    return escape_string(s)


def _format_double(x: float) -> str:
    """ECMAScript Number::toString of a finite double."""
    if x == 0:
        return '0'
    sign = '-' if x < 0 else ''
    mantissa, _, exponent = repr(abs(x)).partition('e')
    int_part, _, frac_part = mantissa.partition('.')
    digits = int_part + frac_part
    point = len(int_part) + (int(exponent) if exponent else 0)
    stripped = digits.lstrip('0')
    point -= len(digits) - len(stripped)
    digits = stripped.rstrip('0')
    k = len(digits)

    if k <= point <= 21:
        body = digits + '0' * (point - k)
    elif 0 < point <= 21:
        body = digits[:point] + '.' + digits[point:]
    elif -6 < point <= 0:
        body = '0.' + '0' * -point + digits
    else:
        e = point - 1
        head = digits if k == 1 else digits[0] + '.' + digits[1:]
        body = f"{head}e{'+' if e > 0 else '-'}{abs(e)}"
    return sign + body


def encode_number(n: Any) -> str:
    """Encode a finite int or float as a JSON number literal."""
    if isinstance(n, bool):
        raise InvalidType("Booleans are not numbers", n)
    if isinstance(n, int):
        if -MAX_SAFE_INTEGER <= n <= MAX_SAFE_INTEGER:
            return str(int(n))
        try:
            n = float(n)
        except OverflowError:
            raise InvalidNumber("Integer is outside the double range", n) from None
    n = float(n)
    if math.isnan(n):
        raise InvalidNumber("NaN is not allowed", n)
    if math.isinf(n):
        raise InvalidNumber("Infinity is not allowed", n)
    return _format_double(n)


def _utf16_key(s: str):
    return s.encode('utf-16-be', 'surrogatepass'), s


def sort_keys(keys: Iterable[str]) -> List[str]:
    """
    Sort object keys by UTF-16 code units, ascending.

    Insertion sort for small key sets, built-in sort above
    INSERTION_SORT_MAX_KEYS. Returns a new list.
    """
    keys = list(keys)
    if len(keys) > INSERTION_SORT_MAX_KEYS:
        return sorted(keys, key=_utf16_key)

    ordinals = [_utf16_key(k) for k in keys]
    for i in range(1, len(keys)):
        current_key = keys[i]
        current = ordinals[i]
        position = i
        while position > 0 and ordinals[position - 1] > current:
            keys[position] = keys[position - 1]
            ordinals[position] = ordinals[position - 1]
            position -= 1
        keys[position] = current_key
        ordinals[position] = current
    return keys


def _reduce(value: Any) -> Any:
    if is_transformable(value):
        return _reduce(value.to_canonical_value())
    return value


def _is_array(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(
        value, (str, bytes, bytearray, memoryview)
    )


def _encode_array(items: Sequence) -> str:
    values = []
    for item in items:
        encoded = _encode(item)
        values.append('null' if encoded is None else encoded)
    return '[' + ','.join(values) + ']'


def _encode_object(mapping: Mapping) -> str:
    for key in mapping:
        if not isinstance(key, str):
            raise InvalidType(f"Object keys must be strings, got {type(key).__name__}", key)
        if not is_well_formed(key):
            raise InvalidString("Object key contains an unpaired surrogate", key)

    pairs = []
    previous = None
    for key in sort_keys(mapping.keys()):
        encoded = _encode(mapping[key])
        if encoded is None:
            continue
        # "\U0001F600" and "\ud83d\ude00" encode to the same output key.
        units = _utf16_key(key)[0]
        if units == previous:
            raise InvalidString("Object keys collide after surrogate pairing", key)
        previous = units
        pairs.append(encode_string(key) + ':' + encoded)
    return '{' + ','.join(pairs) + '}'


def _encode(value: Any) -> Optional[str]:
    """Encode value, or return None if it has no JSON shape."""
    value = _reduce(value)

    if value is None:
        return 'null'

    if value is UNDEFINED:
        return None

    if isinstance(value, bool):
        return 'true' if value else 'false'

    if isinstance(value, (int, float)):
        return encode_number(value)

    if isinstance(value, str):
        return encode_string(value)

    if isinstance(value, Mapping):
        return _encode_object(value)

    if _is_array(value):
        return _encode_array(value)

    return None


def serialize(value: JsonValue) -> str:
    """
    Serialize a value to its canonical JSON text.

    Rules:
    - Object keys sorted by UTF-16 code units
    - No whitespace
    - Finite numbers only, in JSON.stringify form
    - Well-formed strings only
    - UNDEFINED and values with no JSON shape become null in arrays
      and drop their key in objects
    """
    try:
        value = _reduce(value)
        encoded = _encode(value)
    except CanonicalizationError as err:
        logger.debug("canonical serialization rejected input: %s", err)
        raise

    if encoded is not None:
        return encoded

    if value is UNDEFINED:
        return 'null'

    logger.debug("canonical serialization rejected top-level %s", type(value).__name__)
    raise InvalidType(f"Value of type {type(value).__name__} has no JSON representation", value)


def serialize_bytes(value: JsonValue) -> bytes:
    """Serialize to canonical UTF-8 bytes."""
    return serialize(value).encode('utf-8')


canonicalize = serialize
canonicalize_bytes = serialize_bytes
