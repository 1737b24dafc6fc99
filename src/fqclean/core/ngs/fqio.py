"""

FASTQ Input/Output Core Module

========================================================================

Open FASTQ files (optionally compressed with gzip or bzip2), split them
into lines for the record parser, and decide whether outputs may be
written.

"""

import bz2
import gzip
from pathlib import Path
from typing import Iterable, TextIO

from .fastq import FastqRecord
from .phred import QualityEncoding
from ..error import FormatError
from ..logs import logger

GZIP_EXT = ".gz"
BZIP2_EXT = ".bz2"
FQ_EXTS = ".fq", ".fastq"

OPENERS = {GZIP_EXT: gzip.open,
           BZIP2_EXT: bz2.open}


def open_fastq(file: str | Path, mode: str = "r") -> TextIO:
    """ Open a FASTQ file as text, decompressing or compressing it if
    its extension is .gz or .bz2. """
    file = Path(file)
    opener = OPENERS.get(file.suffix, open)
    if not mode.endswith("t"):
        mode = f"{mode}t"
    logger.detail(f"Opening {file} with mode {repr(mode)}")
    return opener(file, mode)


def iter_lines(handle: Iterable[str]):
    """ Yield every line without its line terminator. """
    for line in handle:
        yield line.rstrip("\r\n")


class FastqReader(object):
    """ Iterate over the records in lines of FASTQ text, annotating any
    FormatError with the source and the line of the bad record. """

    def __init__(self,
                 lines: Iterable[str],
                 encoding: QualityEncoding,
                 source: str = "<lines>"):
        self._lines = iter(lines)
        self.encoding = encoding
        self.source = source
        self.num_lines = 0
        self.num_records = 0

    @classmethod
    def from_handle(cls, handle: TextIO, encoding: QualityEncoding):
        return cls(iter_lines(handle),
                   encoding,
                   getattr(handle, "name", str(handle)))

    def _next_line(self):
        line = next(self._lines)
        self.num_lines += 1
        return line

    def _pull(self):
        """ Pull lines one at a time, counting them. """
        while True:
            try:
                yield self._next_line()
            except StopIteration:
                return

    def __iter__(self):
        lines = self._pull()
        while True:
            first_line = self.num_lines + 1
            try:
                record = FastqRecord.read(lines, self.encoding)
            except FormatError as error:
                raise FormatError(f"{self.source}, record {self.num_records + 1}"
                                  f" (line {first_line}): {error}") from error
            if record is None:
                logger.detail(f"Read {self.num_records} records "
                              f"({self.num_lines} lines) from {self.source}")
                return
            self.num_records += 1
            yield record


def read_fastq(file: str | Path, encoding: QualityEncoding):
    """ Yield every record in a FASTQ file. """
    with open_fastq(file) as handle:
        yield from FastqReader(iter_lines(handle), encoding, str(file))


def need_write(query: str | Path, force: bool = False, warn: bool = True):
    """ Whether a file must be written: True if force is True or if the
    file does not exist, otherwise False (and log a warning if warn). """
    query = Path(query)
    if force or not query.exists():
        return True
    if warn:
        logger.warning(f"{query} exists: use --force to overwrite")
    return False


def write_mode(force: bool = False):
    """ Mode in which to open a file: truncate it if force is True,
    otherwise fail if it exists. """
    return "w" if force else "x"
