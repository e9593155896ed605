# Copyright 2018-present Network Optix, Inc. Licensed under MPL 2.0: www.mozilla.org/MPL/2.0/
"""Base-32 codec as described in RFC 3548 and RFC 4648.

Five bytes (40 bits) are split into eight 5-bit groups.
Each group is an index in a 32-symbol alphabet.
If the last block is short, it is filled with zero bytes,
and the symbols made of filler bits only are replaced with "=".

>>> encode(b'foobar')
b'MZXW6YTBOI======'
>>> decode(b'MZXW6YTBOI======')
b'foobar'
>>> encode(b'foobar', BASE32_HEX_ALPHABET)
b'CPNMUOJ1E8======'
"""
from typing import Mapping

BASE32_ALPHABET = 'ABCDEFGHIJKLMNOPQRSTUVWXYZ234567'
BASE32_HEX_ALPHABET = '0123456789ABCDEFGHIJKLMNOPQRSTUV'
PADDING = '='

_BLOCK_BYTES = 5
_BLOCK_SYMBOLS = 8
_SYMBOL_BITS = 5
_PADDING_CODE = ord(PADDING)
_LINE_SEPARATORS = frozenset(b'\r\n')

# Input bytes in the last block -> padding symbols.
_PADDING_BY_REMAINDER = {1: 6, 2: 4, 3: 3, 4: 1}
# Padding symbols in a block -> bytes it carries.
_BYTES_BY_PADDING = {0: 5, 1: 4, 3: 3, 4: 2, 6: 1}


class MalformedEncoding(ValueError):
    pass


class _UnknownSymbol(MalformedEncoding):

    def __init__(self, symbol: int, position: int):
        super().__init__(f"Symbol {chr(symbol)!r} at position {position} is not in the alphabet")


class _InvalidPadding(MalformedEncoding):

    def __init__(self, count: int, block_start: int):
        super().__init__(
            f"Block at position {block_start} has {count} padding symbols; "
            f"expected one of {sorted(_BYTES_BY_PADDING)}")


def encode(data: bytes, alphabet: str = BASE32_ALPHABET) -> bytes:
    symbols = _alphabet_symbols(alphabet)
    remainder = len(data) % _BLOCK_BYTES
    if remainder:
        data = bytes(data) + bytes(_BLOCK_BYTES - remainder)
    result = bytearray()
    for block_start in range(0, len(data), _BLOCK_BYTES):
        block = int.from_bytes(data[block_start:block_start + _BLOCK_BYTES], 'big')
        for i in range(_BLOCK_SYMBOLS):
            shift = (_BLOCK_SYMBOLS - 1 - i) * _SYMBOL_BITS
            result.append(symbols[(block >> shift) & 0x1F])
    padding_count = _PADDING_BY_REMAINDER.get(remainder, 0)
    if padding_count:
        result[-padding_count:] = PADDING.encode('ascii') * padding_count
    return bytes(result)


def decode(data: bytes, alphabet: str = BASE32_ALPHABET) -> bytes:
    """Decode base-32 symbols; line separators and missing padding are tolerated.

    Filler bits in the last data symbol of a padded block are not checked,
    so non-canonical input decodes to the same bytes as the canonical one.

    >>> decode(b'MY======'), decode(b'MZ======')
    (b'f', b'f')
    """
    lookup = _reverse_lookup(alphabet)
    data = sanitize(data)
    result = bytearray()
    for block_start in range(0, len(data), _BLOCK_SYMBOLS):
        block = 0
        padding_count = 0
        for position in range(block_start, block_start + _BLOCK_SYMBOLS):
            symbol = data[position]
            if symbol == _PADDING_CODE:
                padding_count += 1
                value = 0
            elif padding_count:
                # Data after padding within the same block.
                raise _InvalidPadding(padding_count, block_start)
            else:
                try:
                    value = lookup[symbol]
                except KeyError:
                    raise _UnknownSymbol(symbol, position)
            block = (block << _SYMBOL_BITS) | value
        try:
            byte_count = _BYTES_BY_PADDING[padding_count]
        except KeyError:
            raise _InvalidPadding(padding_count, block_start)
        if padding_count and block_start + _BLOCK_SYMBOLS < len(data):
            raise MalformedEncoding(f"Padded block at position {block_start} is not the last one")
        result.extend(block.to_bytes(_BLOCK_BYTES, 'big')[:byte_count])
    return bytes(result)


def sanitize(data: bytes) -> bytes:
    """Drop line separators and pad to a whole number of blocks.

    >>> sanitize(b'MZXW6\\r\\nYTBOI')
    b'MZXW6YTBOI======'
    >>> sanitize(b'')
    b''
    """
    sanitized = bytes(b for b in data if b not in _LINE_SEPARATORS)
    remainder = len(sanitized) % _BLOCK_SYMBOLS
    if remainder:
        sanitized += PADDING.encode('ascii') * (_BLOCK_SYMBOLS - remainder)
    return sanitized


def encode_to_string(data: bytes, alphabet: str = BASE32_ALPHABET) -> str:
    return encode(data, alphabet).decode('ascii')


def decode_to_bytes(text: str, alphabet: str = BASE32_ALPHABET) -> bytes:
    try:
        data = text.encode('ascii')
    except UnicodeEncodeError as e:
        raise MalformedEncoding(f"Non-ASCII symbol at position {e.start}")
    return decode(data, alphabet)


def _alphabet_symbols(alphabet: str) -> bytes:
    if len(alphabet) != 32 or len(set(alphabet)) != 32:
        raise ValueError(f"Alphabet must have 32 distinct symbols: {alphabet!r}")
    if PADDING in alphabet:
        raise ValueError(f"Alphabet must not contain padding symbol {PADDING!r}")
    return alphabet.encode('ascii')


def _reverse_lookup(alphabet: str) -> Mapping[int, int]:
    return {symbol: value for value, symbol in enumerate(_alphabet_symbols(alphabet))}

