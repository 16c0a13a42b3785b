"""Seqhash: stable identifiers for DNA, RNA and protein sequences.

A seqhash looks like ``v1_DCD_<hex digest>``. The middle tag encodes the
sequence type (D, R or P), topology (C circular, L linear) and strandedness
(D double, S single). Circular sequences are rotated to their
lexicographically least rotation and double stranded sequences are compared
with their reverse complement so that equivalent molecules hash equally.
The digest is the 256-bit BLAKE3 hash of the normalised sequence.
"""

from __future__ import annotations

import struct
from enum import Enum
from typing import NamedTuple

from polydna.transform import reverse_complement

__all__ = [
    "SequenceType",
    "SeqhashError",
    "blake3_256",
    "least_rotation",
    "rotate_sequence",
    "hash_sequence",
]


class SequenceType(str, Enum):
    """Kinds of sequence that can be hashed."""

    DNA = "DNA"
    RNA = "RNA"
    PROTEIN = "PROTEIN"


class SeqhashError(ValueError):
    """Raised when a sequence cannot be hashed."""


_NUCLEIC_LETTERS = "ATUGCYRSWKMBDHVNZ"
_PROTEIN_LETTERS = "ACDEFGHIKLMNPQRSTVWYUO*BXZ"
_TYPE_LETTERS = {
    SequenceType.DNA: "D",
    SequenceType.RNA: "R",
    SequenceType.PROTEIN: "P",
}

# --- BLAKE3 -----------------------------------------------------------------

_MASK = 0xFFFFFFFF
_IV = (
    0x6A09E667,
    0xBB67AE85,
    0x3C6EF372,
    0xA54FF53A,
    0x510E527F,
    0x9B05688C,
    0x1F83D9AB,
    0x5BE0CD19,
)
_PERMUTATION = (2, 6, 3, 10, 7, 0, 4, 13, 1, 11, 12, 5, 9, 14, 15, 8)
_CHUNK_START = 1
_CHUNK_END = 2
_PARENT = 4
_ROOT = 8
_BLOCK_LEN = 64
_CHUNK_LEN = 1024


def _rotr(value: int, shift: int) -> int:
    return ((value >> shift) | (value << (32 - shift))) & _MASK


def _g(state: list[int], a: int, b: int, c: int, d: int, mx: int, my: int) -> None:
    state[a] = (state[a] + state[b] + mx) & _MASK
    state[d] = _rotr(state[d] ^ state[a], 16)
    state[c] = (state[c] + state[d]) & _MASK
    state[b] = _rotr(state[b] ^ state[c], 12)
    state[a] = (state[a] + state[b] + my) & _MASK
    state[d] = _rotr(state[d] ^ state[a], 8)
    state[c] = (state[c] + state[d]) & _MASK
    state[b] = _rotr(state[b] ^ state[c], 7)


def _round(state: list[int], m: list[int]) -> None:
    _g(state, 0, 4, 8, 12, m[0], m[1])
    _g(state, 1, 5, 9, 13, m[2], m[3])
    _g(state, 2, 6, 10, 14, m[4], m[5])
    _g(state, 3, 7, 11, 15, m[6], m[7])
    _g(state, 0, 5, 10, 15, m[8], m[9])
    _g(state, 1, 6, 11, 12, m[10], m[11])
    _g(state, 2, 7, 8, 13, m[12], m[13])
    _g(state, 3, 4, 9, 14, m[14], m[15])


def _compress(
    chaining_value: tuple[int, ...] | list[int],
    block: bytes,
    counter: int,
    block_len: int,
    flags: int,
) -> list[int]:
    message = list(struct.unpack("<16I", block))
    state = [
        *chaining_value,
        *_IV[:4],
        counter & _MASK,
        (counter >> 32) & _MASK,
        block_len,
        flags,
    ]
    for round_number in range(7):
        _round(state, message)
        if round_number < 6:
            message = [message[i] for i in _PERMUTATION]
    low = [a ^ b for a, b in zip(state[:8], state[8:])]
    high = [a ^ b for a, b in zip(state[8:], chaining_value)]
    return low + high


class _Output(NamedTuple):
    chaining_input: tuple[int, ...] | list[int]
    block: bytes
    counter: int
    block_len: int
    flags: int

    def chaining_value(self) -> list[int]:
        return _compress(
            self.chaining_input, self.block, self.counter, self.block_len, self.flags
        )[:8]

    def root_bytes(self) -> bytes:
        words = _compress(
            self.chaining_input, self.block, 0, self.block_len, self.flags | _ROOT
        )
        return struct.pack("<8I", *words[:8])


def _chunk_output(chunk: bytes, counter: int) -> _Output:
    blocks = [chunk[i : i + _BLOCK_LEN] for i in range(0, len(chunk), _BLOCK_LEN)] or [b""]
    chaining_value: tuple[int, ...] | list[int] = _IV
    flags = _CHUNK_START
    for block in blocks[:-1]:
        chaining_value = _compress(chaining_value, block, counter, _BLOCK_LEN, flags)[:8]
        flags = 0
    last = blocks[-1]
    return _Output(
        chaining_value, last.ljust(_BLOCK_LEN, b"\0"), counter, len(last), flags | _CHUNK_END
    )


def _parent_output(left: list[int], right: list[int]) -> _Output:
    return _Output(_IV, struct.pack("<16I", *left, *right), 0, _BLOCK_LEN, _PARENT)


def blake3_256(data: bytes) -> bytes:
    """Return the 32-byte BLAKE3 digest of ``data``."""
    data = bytes(data)
    chunks = [data[i : i + _CHUNK_LEN] for i in range(0, len(data), _CHUNK_LEN)] or [b""]
    stack: list[list[int]] = []
    for index, chunk in enumerate(chunks[:-1]):
        chaining_value = _chunk_output(chunk, index).chaining_value()
        total_chunks = index + 1
        while total_chunks & 1 == 0:
            chaining_value = _parent_output(stack.pop(), chaining_value).chaining_value()
            total_chunks >>= 1
        stack.append(chaining_value)
    output = _chunk_output(chunks[-1], len(chunks) - 1)
    while stack:
        output = _parent_output(stack.pop(), output.chaining_value())
    return output.root_bytes()


# --- Rotation ---------------------------------------------------------------


def least_rotation(sequence: str) -> int:
    """Return the start index of the lexicographically least rotation (Booth)."""
    doubled = sequence + sequence
    failure = [-1] * len(doubled)
    least = 0
    for index in range(1, len(doubled)):
        char = doubled[index]
        step = failure[index - least - 1]
        while step != -1 and char != doubled[least + step + 1]:
            if char < doubled[least + step + 1]:
                least = index - step - 1
            step = failure[step]
        if char != doubled[least + step + 1]:
            if char < doubled[least]:
                least = index
            failure[index - least] = -1
        else:
            failure[index - least] = step + 1
    return least


def rotate_sequence(sequence: str) -> str:
    """Rotate a circular sequence to its deterministic starting point."""
    start = least_rotation(sequence)
    return sequence[start:] + sequence[:start]


# --- Seqhash ----------------------------------------------------------------


def _coerce_type(sequence_type: SequenceType | str) -> SequenceType:
    try:
        return SequenceType(sequence_type)
    except ValueError:
        raise SeqhashError(
            "Only sequenceTypes of DNA, RNA, or PROTEIN allowed. "
            f"Got sequenceType: {sequence_type}"
        ) from None


def hash_sequence(
    sequence: str,
    sequence_type: SequenceType | str,
    circular: bool,
    double_stranded: bool,
) -> str:
    """Return the v1 seqhash of ``sequence``.

    Raises SeqhashError for an unknown sequence type, a letter outside the
    allowed alphabet, or a double stranded protein.
    """
    sequence = sequence.upper()
    kind = _coerce_type(sequence_type)
    if kind is SequenceType.RNA:
        sequence = sequence.replace("U", "T")

    if kind is SequenceType.PROTEIN:
        for char in sequence:
            if char not in _PROTEIN_LETTERS:
                raise SeqhashError(
                    f"Only letters {_PROTEIN_LETTERS} are allowed for Proteins. "
                    f"Got letter: {char}"
                )
        if double_stranded:
            raise SeqhashError("Proteins cannot be double stranded")
    else:
        for char in sequence:
            if char not in _NUCLEIC_LETTERS:
                raise SeqhashError(
                    f"Only letters {_NUCLEIC_LETTERS} are allowed for DNA/RNA. "
                    f"Got letter: {char}"
                )

    if circular and double_stranded:
        deterministic = min(
            rotate_sequence(sequence), rotate_sequence(reverse_complement(sequence))
        )
    elif circular:
        deterministic = rotate_sequence(sequence)
    elif double_stranded:
        deterministic = min(sequence, reverse_complement(sequence))
    else:
        deterministic = sequence

    metadata = (
        _TYPE_LETTERS[kind]
        + ("C" if circular else "L")
        + ("D" if double_stranded else "S")
    )
    digest = blake3_256(deterministic.encode("utf-8")).hex()
    return f"v1_{metadata}_{digest}"