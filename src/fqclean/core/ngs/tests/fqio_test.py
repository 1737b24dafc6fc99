"""

Tests for the FASTQ Input/Output Core Module

========================================================================

"""

import io
import unittest as ut
from pathlib import Path
from tempfile import TemporaryDirectory

from fqclean.core.error import FormatError
from fqclean.core.logs import Level, get_config, set_config
from fqclean.core.ngs.fastq import FastqRecord
from fqclean.core.ngs.fqio import (FastqReader,
                                   iter_lines,
                                   need_write,
                                   open_fastq,
                                   read_fastq,
                                   write_mode)
from fqclean.core.ngs.phred import phred33, phred64

FASTQ_TEXT = ("@read1/1\nACGTN\n+\nIIIII\n"
              "@read2/1\nacgt\n+read2/1\n!+5?\n")


class TestIterLines(ut.TestCase):

    def test_strip_terminators(self):
        lines = ["@read1\n", "ACGT\r\n", "+\n", "IIII"]
        self.assertEqual(list(iter_lines(lines)),
                         ["@read1", "ACGT", "+", "IIII"])

    def test_keep_other_whitespace(self):
        self.assertEqual(list(iter_lines(["@read1 x \n"])), ["@read1 x "])


class TestFastqReader(ut.TestCase):

    def test_read(self):
        reader = FastqReader(FASTQ_TEXT.splitlines(), phred33())
        reads = list(reader)
        self.assertEqual(reads,
                         [FastqRecord("read1/1", "ACGTN", "IIIII", phred33()),
                          FastqRecord("read2/1", "ACGT", "!+5?", phred33())])
        self.assertEqual(reader.num_records, 2)
        self.assertEqual(reader.num_lines, 8)

    def test_from_handle(self):
        handle = io.StringIO(FASTQ_TEXT)
        reads = list(FastqReader.from_handle(handle, phred33()))
        self.assertEqual([read.header for read in reads],
                         ["read1/1", "read2/1"])

    def test_error_location(self):
        lines = ["@read1", "ACGT", "+", "IIII",
                 "@read2", "ACGT", "+", "III"]
        reader = FastqReader(lines, phred33(), "reads.fq")
        self.assertRaisesRegex(FormatError,
                               r"reads\.fq, record 2 \(line 5\): .*"
                               r"length does not match",
                               list, reader)

    def test_error_cut_off(self):
        lines = ["@read1", "ACGT", "+", "IIII", "@read2"]
        reader = FastqReader(lines, phred33(), "reads.fq")
        self.assertRaisesRegex(FormatError,
                               r"record 2 \(line 5\): .*cut off after header",
                               list, reader)

    def test_error_encoding(self):
        reader = FastqReader(FASTQ_TEXT.splitlines(), phred64(), "reads.fq")
        self.assertRaisesRegex(FormatError,
                               r"record 2 \(line 5\): .*below the minimum",
                               list, reader)


class TestReadWriteFastq(ut.TestCase):

    def setUp(self):
        self._temp_dir = TemporaryDirectory()
        self.temp_dir = Path(self._temp_dir.name)
        self._config = get_config()
        set_config(verbosity=Level.FATAL)

    def tearDown(self):
        set_config(**self._config._asdict())
        self._temp_dir.cleanup()

    def test_round_trip(self):
        reads = list(FastqReader(FASTQ_TEXT.splitlines(), phred33()))
        for name in ["reads.fq", "reads.fq.gz", "reads.fq.bz2"]:
            with self.subTest(name=name):
                file = self.temp_dir.joinpath(name)
                with open_fastq(file, "x") as handle:
                    for read in reads:
                        handle.write(read.to_str(phred64()))
                self.assertEqual(list(read_fastq(file, phred64())), reads)

    def test_read_fastq_error_names_file(self):
        file = self.temp_dir.joinpath("reads.fq.bz2")
        with open_fastq(file, "x") as handle:
            handle.write("@read1\nACGT\n+\nII\n")
        self.assertRaisesRegex(FormatError,
                               rf"{file.name}, record 1 \(line 1\)",
                               list, read_fastq(file, phred33()))

    def test_compressed(self):
        file = self.temp_dir.joinpath("reads.fq.gz")
        with open_fastq(file, "w") as handle:
            handle.write(FASTQ_TEXT)
        with open(file, "rb") as handle:
            # Magic number of gzip
            self.assertEqual(handle.read(2), b"\x1f\x8b")
        with open_fastq(file) as handle:
            self.assertEqual(handle.read(), FASTQ_TEXT)

    def test_need_write(self):
        file = self.temp_dir.joinpath("reads.fq")
        self.assertTrue(need_write(file))
        file.write_text(FASTQ_TEXT)
        self.assertFalse(need_write(file))
        self.assertFalse(need_write(file, warn=False))
        self.assertTrue(need_write(file, force=True))

    def test_write_mode(self):
        file = self.temp_dir.joinpath("reads.fq")
        file.write_text(FASTQ_TEXT)
        with self.assertRaises(FileExistsError):
            open_fastq(file, write_mode(force=False))
        with open_fastq(file, write_mode(force=True)) as handle:
            handle.write("")
        self.assertEqual(file.read_text(), "")


if __name__ == "__main__":
    ut.main(verbosity=2)
