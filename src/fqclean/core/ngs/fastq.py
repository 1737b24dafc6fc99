"""

FASTQ Record Core Module

========================================================================

Parse, edit, and write sequencing reads in FASTQ format::

    @header
    SEQUENCE
    +
    QUALITIES

Each record stores its qualities as Phred+33 characters regardless of
the encoding of the file from which it was read.

"""

from typing import Iterable, Iterator

import numpy as np

from .phred import (MAX_PHRED_SCORE,
                    MIN_PHRED_SCORE,
                    PHRED_OFFSET_33,
                    QualityEncoding,
                    encode_phred)
from ..error import FormatError
from ..seq.clean import BASEN, clean_sequence
from ..validate import require_atleast, require_between, require_isinstance

HEADER_MARK = "@"
SEPARATOR_MARK = "+"

# Complements indexed by the last 4 bits of the ASCII code of a base,
# which are unique among A, C, G, T, and N in either case.
COMPLEMENTS = "-T-GA--C------N-"
COMP_TRANS = str.maketrans({code: COMPLEMENTS[code & 0xF]
                            for code in range(128)})


class FastqRecord(object):
    """ One read in FASTQ format. """
    __slots__ = ["_header", "_seq", "_quals"]

    def __init__(self,
                 header: str,
                 seq: str,
                 quals: str,
                 encoding: QualityEncoding):
        """
        Parameters
        ----------
        header: str
            Name of the read, without the leading '@'.
        seq: str
            Sequence of the read; cleaned before being stored.
        quals: str
            Qualities of the read in the given encoding.
        encoding: QualityEncoding
            Encoding of quals, which are stored as Phred+33.
        """
        require_isinstance("encoding", encoding, QualityEncoding)
        if len(seq) != len(quals):
            raise FormatError("Invalid FASTQ record; sequence/quality length "
                              f"does not match ({len(seq)} ≠ {len(quals)})")
        self._header = header
        self._seq = clean_sequence(seq)
        self._quals = encoding.decode_string(quals)

    @classmethod
    def read(cls, lines: Iterator[str], encoding: QualityEncoding):
        """ Read the next record from an iterator of lines (without line
        terminators). Return None if there are no more records; raise
        FormatError if the record is malformed or cut off. """
        # Running out of lines before the header is the only normal way
        # for the input to end.
        if (header := next(lines, None)) is None:
            return None
        if not header.startswith(HEADER_MARK):
            raise FormatError(f"FASTQ header did not start with "
                              f"{repr(HEADER_MARK)}: {repr(header)}")
        if not (header := header[len(HEADER_MARK):]):
            raise FormatError("FASTQ header is empty")
        if (seq := next(lines, None)) is None:
            raise FormatError("Partial FASTQ record; cut off after header")
        if not seq:
            raise FormatError(f"Sequence of FASTQ record {repr(header)} "
                              f"is empty")
        if (separator := next(lines, None)) is None:
            raise FormatError("Partial FASTQ record; cut off after sequence")
        if not separator.startswith(SEPARATOR_MARK):
            raise FormatError(f"FASTQ record {repr(header)} lacks separator "
                              f"character ({SEPARATOR_MARK})")
        if (quals := next(lines, None)) is None:
            raise FormatError("Partial FASTQ record; cut off after separator")
        return cls(header, seq, quals, encoding)

    @property
    def header(self):
        """ Name of the read, without the leading '@'. """
        return self._header

    @property
    def seq(self):
        """ Sequence of the read. """
        return self._seq

    @property
    def quals(self):
        """ Qualities of the read as Phred+33 characters. """
        return self._quals

    @property
    def length(self):
        return len(self._seq)

    @property
    def phreds(self):
        """ Phred score of each base. """
        return (np.frombuffer(self._quals.encode(), dtype=np.uint8)
                - np.uint8(PHRED_OFFSET_33))

    def mean_quality(self):
        """ Mean Phred score, or NaN if the read is empty. """
        return float(self.phreds.mean()) if self._quals else np.nan

    def count_ns(self):
        """ Number of ambiguous bases (N). """
        return self._seq.count(BASEN)

    def _keep(self, start: int, end: int):
        self._seq = self._seq[start: end]
        self._quals = self._quals[start: end]

    def trim_low_quality_bases(self,
                               trim_ambiguous: bool = True,
                               low_quality: int | None = 2):
        """
        Trim bases from both ends of the read up to the first base that
        is not ambiguous (if trim_ambiguous) and has quality greater
        than low_quality.

        Parameters
        ----------
        trim_ambiguous: bool
            Trim ambiguous bases (N) regardless of their quality.
        low_quality: int | None
            Trim bases whose Phred scores are at most this value; if
            None, then trim only ambiguous bases.

        Returns
        -------
        tuple[int, int]
            Number of bases trimmed from the 5' and 3' ends.
        """
        if low_quality is None:
            # Every quality character is greater than the empty string.
            threshold = ""
        else:
            require_between("low_quality",
                            low_quality,
                            MIN_PHRED_SCORE,
                            MAX_PHRED_SCORE,
                            classes=int)
            threshold = encode_phred(low_quality, PHRED_OFFSET_33)

        def acceptable(i: int):
            return ((not trim_ambiguous or self._seq[i] != BASEN)
                    and self._quals[i] > threshold)

        length = self.length
        start = next(filter(acceptable, range(length)), None)
        if start is None:
            # No base is acceptable, so trim the entire read.
            if length:
                self._keep(0, 0)
            return length, 0
        end = next(filter(acceptable, range(length - 1, start, -1)), start) + 1
        if start or end < length:
            self._keep(start, end)
        return start, length - end

    def truncate(self, start: int = 0, length: int | None = None):
        """ Keep only the bases from start to start + length (or to the
        end if length is None), and return the number of bases removed.
        """
        require_between("start", start, 0, self.length, classes=int)
        if length is None:
            length = self.length - start
        require_atleast("length", length, 0, classes=int)
        removed = self.length - min(length, self.length - start)
        if removed:
            self._keep(start, start + length)
        return removed

    def reverse_complement(self):
        """ Reverse complement the sequence and reverse the qualities. """
        self._seq = self._seq[::-1].translate(COMP_TRANS)
        self._quals = self._quals[::-1]

    def add_prefix_to_header(self, prefix: str):
        self._header = f"{prefix}{self._header}"

    def copy(self):
        """ Independent copy of the record. """
        record = self.__class__.__new__(self.__class__)
        record._header = self._header
        record._seq = self._seq
        record._quals = self._quals
        return record

    def to_str(self, encoding: QualityEncoding):
        """ Format the record as four lines of FASTQ text, with the
        qualities in the given encoding. """
        return (f"{HEADER_MARK}{self._header}\n"
                f"{self._seq}\n"
                f"{SEPARATOR_MARK}\n"
                f"{encoding.encode_string(self._quals)}\n")

    def __len__(self):
        return self.length

    def __eq__(self, other):
        if not isinstance(other, FastqRecord):
            return NotImplemented
        return (self._header == other._header
                and self._seq == other._seq
                and self._quals == other._quals)

    def __repr__(self):
        return (f"{type(self).__name__}({repr(self._header)}, "
                f"{repr(self._seq)}, {repr(self._quals)})")


def iter_fastq(lines: Iterable[str], encoding: QualityEncoding):
    """ Yield every record from lines of FASTQ text. """
    lines = iter(lines)
    while (record := FastqRecord.read(lines, encoding)) is not None:
        yield record

########################################################################
#                                                                      #
# © Copyright 2024, the Rouskin Lab.                                   #
#                                                                      #
# This file is part of FQClean.                                        #
#                                                                      #
# FQClean is free software; you can redistribute it and/or modify it   #
# under the terms of the GNU General Public License as published by    #
# the Free Software Foundation; either version 3 of the License, or    #
# (at your option) any later version.                                  #
#                                                                      #
# FQClean is distributed in the hope that it will be useful, but       #
# WITHOUT ANY WARRANTY; without even the implied warranty of MERCHANT- #
# ABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the GNU General     #
# Public License for more details.                                     #
#                                                                      #
# You should have received a copy of the GNU General Public License    #
# along with FQClean; if not, see <https://www.gnu.org/licenses>.      #
#                                                                      #
########################################################################
