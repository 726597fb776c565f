"""Differential encoding of a sequence against a reference sequence."""

from __future__ import annotations

import re
from collections import defaultdict
from typing import Dict, Iterable, List, Optional, Tuple

N_CODE = 4
N_RUN_STARTER_CODE = 30
MIN_NRUN_LEN = 4
MAX_NO_TRIES = 64
HASHING_STEP = 4

_PADDING_SYMBOL = 31
_LITERAL_BASE = ord("A")
_LITERAL_LAST = _LITERAL_BASE + 20
_REF_LITERAL = ord("!")
_COMMA = ord(",")
_PERIOD = ord(".")
_INT_PATTERN = re.compile(rb"-?[0-9]*")


class LZDiff:
    """Encodes numeric sequences as literals, N-runs and matches into a reference.

    The encoding is a byte string: a literal base b is the byte ``'A' + b``; a
    run of at least four N bases is ``30``, the decimal excess over four and
    ``4``; a match is the decimal offset from the predicted reference position,
    optionally ``,`` and the decimal excess over the minimum match length, and
    a closing ``.``. A match without a length runs to the end of the reference.
    """

    def __init__(self, min_match_len: int) -> None:
        if min_match_len < HASHING_STEP:
            raise ValueError(
                f"min_match_len must be at least {HASHING_STEP}, got {min_match_len}"
            )
        self.min_match_len = min_match_len
        self.key_len = min_match_len - HASHING_STEP + 1
        self._key_mask = (1 << 64) - 1 if self.key_len >= 32 else (1 << (2 * self.key_len)) - 1
        self._reference = b""
        self._padded = b""
        self._index: Dict[int, List[int]] = {}

    def prepare(self, reference: Iterable[int]) -> None:
        """Set the reference sequence and index its sampled k-mers."""
        self._reference = bytes(reference)
        self._padded = self._reference + bytes([_PADDING_SYMBOL]) * self.key_len
        index: Dict[int, List[int]] = defaultdict(list)
        for i in range(0, len(self._padded) - self.key_len, HASHING_STEP):
            code = self._code(self._padded, i)
            if code is not None:
                index[code].append(i // HASHING_STEP)
        self._index = dict(index)

    def _code(self, seq: bytes, start: int) -> Optional[int]:
        code = 0
        for base in seq[start : start + self.key_len]:
            if base > 3:
                return None
            code = ((code << 2) | base) & self._key_mask
        return code

    def _code_skip1(self, prev_code: int, seq: bytes, start: int) -> Optional[int]:
        base = seq[start + self.key_len - 1]
        if base > 3:
            return None
        return ((prev_code << 2) & self._key_mask) | base

    @staticmethod
    def _nrun_len(seq: bytes, start: int, max_len: int) -> int:
        if len(seq) - start < 3 or any(b != N_CODE for b in seq[start : start + 3]):
            return 0
        length = 3
        while length < max_len and seq[start + length] == N_CODE:
            length += 1
        return length

    @staticmethod
    def _matching_length(a: bytes, a_start: int, b: bytes, b_start: int, max_len: int) -> int:
        limit = min(max_len, len(a) - a_start, len(b) - b_start)
        length = 0
        while length < limit and a[a_start + length] == b[b_start + length]:
            length += 1
        return length

    def _find_best_match(
        self, code: int, target: bytes, text_pos: int, max_len: int, no_prev_literals: int
    ) -> Optional[Tuple[int, int, int]]:
        positions = self._index.get(code)
        if positions is None:
            return None

        best_ref_pos = best_len_bck = best_len_fwd = 0
        min_to_update = self.min_match_len
        ref = self._padded

        for pos in positions[:MAX_NO_TRIES]:
            h_pos = pos * HASHING_STEP
            if h_pos >= len(ref):
                continue
            f_len = self._matching_length(target, text_pos, ref, h_pos, max_len)
            if f_len < self.key_len:
                continue
            b_len = 0
            max_back = min(no_prev_literals, h_pos, text_pos)
            while b_len < max_back and target[text_pos - b_len - 1] == ref[h_pos - b_len - 1]:
                b_len += 1
            if b_len + f_len > min_to_update:
                best_ref_pos, best_len_bck, best_len_fwd = h_pos, b_len, f_len
                min_to_update = b_len + f_len

        if best_len_bck + best_len_fwd >= self.min_match_len:
            return best_ref_pos, best_len_bck, best_len_fwd
        return None

    def encode(self, target: Iterable[int]) -> bytes:
        """Encode target relative to the prepared reference.

        A target equal to the reference encodes to an empty byte string.
        """
        text = bytes(target)
        if text == self._reference:
            return b""

        encoded = bytearray()
        text_size = len(text)
        i = 0
        pred_pos = 0
        no_prev_literals = 0
        x_prev: Optional[int] = None

        def literal(base: int) -> None:
            encoded.append(_LITERAL_BASE + base)

        while i + self.key_len < text_size:
            if x_prev is not None and no_prev_literals > 0:
                x = self._code_skip1(x_prev, text, i)
            else:
                x = self._code(text, i)
            x_prev = x

            if x is None:
                nrun_len = self._nrun_len(text, i, text_size - i)
                if nrun_len >= MIN_NRUN_LEN:
                    encoded.append(N_RUN_STARTER_CODE)
                    encoded += str(nrun_len - MIN_NRUN_LEN).encode()
                    encoded.append(N_CODE)
                    i += nrun_len
                    no_prev_literals = 0
                else:
                    literal(text[i])
                    i += 1
                    pred_pos += 1
                    no_prev_literals += 1
                continue

            match = self._find_best_match(x, text, i, text_size - i, no_prev_literals)
            if match is None:
                literal(text[i])
                i += 1
                pred_pos += 1
                no_prev_literals += 1
                continue

            match_pos, len_bck, len_fwd = match
            if len_bck:
                del encoded[-len_bck:]
                i -= len_bck
                pred_pos -= len_bck

            ref_start = match_pos - len_bck
            total_len = len_bck + len_fwd
            to_end = i + total_len == text_size and ref_start + total_len == len(self._reference)

            encoded += str(ref_start - pred_pos).encode()
            if not to_end:
                encoded.append(_COMMA)
                encoded += str(total_len - self.min_match_len).encode()
            encoded.append(_PERIOD)

            pred_pos = ref_start + total_len
            i += total_len
            no_prev_literals = 0

        for base in text[i:]:
            literal(base)

        return bytes(encoded)

    @staticmethod
    def _read_int(data: bytes, start: int) -> Tuple[int, int]:
        match = _INT_PATTERN.match(data, start)
        text = match.group() if match else b""
        digits = text.lstrip(b"-")
        value = int(digits) if digits else 0
        if text.startswith(b"-"):
            value = -value
        return value, start + len(text)

    def decode(self, encoded: Iterable[int]) -> bytes:
        """Rebuild a sequence from its encoding and the prepared reference."""
        data = bytes(encoded)
        decoded = bytearray()
        pred_pos = 0
        i = 0
        size = len(data)

        while i < size:
            code = data[i]
            if _LITERAL_BASE <= code <= _LITERAL_LAST or code == _REF_LITERAL:
                if code == _REF_LITERAL:
                    if pred_pos >= len(self._padded):
                        raise ValueError(f"reference literal beyond reference at {pred_pos}")
                    decoded.append(self._padded[pred_pos])
                else:
                    decoded.append(code - _LITERAL_BASE)
                pred_pos += 1
                i += 1
            elif code == N_RUN_STARTER_CODE:
                raw_len, i = self._read_int(data, i + 1)
                i += 1
                decoded += bytes([N_CODE]) * (raw_len + MIN_NRUN_LEN)
            else:
                offset, i = self._read_int(data, i)
                if i >= size:
                    raise ValueError("truncated match in encoded data")
                ref_pos = pred_pos + offset
                if data[i] == _COMMA:
                    raw_len, i = self._read_int(data, i + 1)
                    i += 1
                    length = raw_len + self.min_match_len
                else:
                    i += 1
                    length = len(self._reference) - ref_pos
                if ref_pos < 0 or length < 0 or ref_pos + length > len(self._padded):
                    raise ValueError(
                        f"match at {ref_pos} of length {length} lies outside the reference"
                    )
                decoded += self._padded[ref_pos : ref_pos + length]
                pred_pos = ref_pos + length

        return bytes(decoded)