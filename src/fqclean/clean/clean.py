"""

FASTQ Cleaning Module

========================================================================

Trim and filter the reads in single-end or paired-end FASTQ files, and
rewrite their quality scores in another encoding.

"""

import json
from collections import Counter
from contextlib import ExitStack, closing
from pathlib import Path
from typing import Iterable, NamedTuple

import pandas as pd

from ..core.error import IncompatibleOptionsError
from ..core.logs import logger
from ..core.ngs.fastq import FastqRecord
from ..core.ngs.fqio import (BZIP2_EXT,
                             FQ_EXTS,
                             GZIP_EXT,
                             need_write,
                             open_fastq,
                             read_fastq,
                             write_mode)
from ..core.ngs.mate import iter_interleaved_fastq, iter_paired_fastq
from ..core.ngs.phred import (MAX_PHRED_SCORE,
                              MIN_PHRED_SCORE,
                              QualityEncoding)
from ..core.tmp import release_to_out, with_tmp_dir
from ..core.validate import require_atleast, require_between

TRUNCATED = "truncated"
PAIR1 = "pair1"
PAIR2 = "pair2"
SINGLETON = "singleton"
DISCARDED = "discarded"
SETTINGS = "settings"
LENGTHS = "lengths"
OUT_FQ_EXT = ".fq"
JSON_EXT = ".json"
CSV_EXT = ".csv"


class Trimmed(NamedTuple):
    """ Number of bases trimmed from each end of a read. """
    end5: int
    end3: int


class ReadCleaner(object):
    """ Trim the ends of reads and decide whether to keep them. """

    def __init__(self, *,
                 trim_qualities: bool = False,
                 min_quality: int = 2,
                 trim_ns: bool = False,
                 trim5p: int = 0,
                 trim3p: int = 0,
                 min_length: int = 15,
                 max_ns: int = 1000):
        require_between("min_quality", min_quality,
                        MIN_PHRED_SCORE, MAX_PHRED_SCORE,
                        classes=int)
        require_atleast("trim5p", trim5p, 0, classes=int)
        require_atleast("trim3p", trim3p, 0, classes=int)
        require_atleast("min_length", min_length, 0, classes=int)
        require_atleast("max_ns", max_ns, 0, classes=int)
        self.trim_qualities = trim_qualities
        self.min_quality = min_quality
        self.trim_ns = trim_ns
        self.trim5p = trim5p
        self.trim3p = trim3p
        self.min_length = min_length
        self.max_ns = max_ns

    def trim(self, read: FastqRecord):
        """ Trim a fixed number of bases, then low-quality and ambiguous
        bases, from the ends of the read. """
        end5 = end3 = 0
        if self.trim5p or self.trim3p:
            length = read.length
            end5 = min(self.trim5p, length)
            end3 = min(self.trim3p, length - end5)
            read.truncate(end5, length - end5 - end3)
        if self.trim_qualities or self.trim_ns:
            qual5, qual3 = read.trim_low_quality_bases(
                self.trim_ns,
                self.min_quality if self.trim_qualities else None
            )
            end5 += qual5
            end3 += qual3
        return Trimmed(end5, end3)

    def is_acceptable(self, read: FastqRecord):
        """ Whether the read is long enough and not too ambiguous. """
        return read.length >= self.min_length and read.count_ns() <= self.max_ns

    def to_dict(self):
        return {"Trim low-quality bases": self.trim_qualities,
                "Minimum quality": self.min_quality,
                "Trim ambiguous bases": self.trim_ns,
                "Bases trimmed from 5' ends": self.trim5p,
                "Bases trimmed from 3' ends": self.trim3p,
                "Minimum length": self.min_length,
                "Maximum ambiguous bases": self.max_ns}


class CleanStats(object):
    """ Counts of reads and bases while cleaning. """

    def __init__(self):
        self.num_reads = 0
        self.num_retained = 0
        self.num_discarded = 0
        self.num_singletons = 0
        self.num_trimmed5 = 0
        self.num_trimmed3 = 0
        self.num_ns = 0
        self._lengths = Counter()

    def add(self, read: FastqRecord, trimmed: Trimmed, retained: bool):
        self.num_reads += 1
        self.num_trimmed5 += trimmed.end5
        self.num_trimmed3 += trimmed.end3
        if retained:
            self.num_retained += 1
            self.num_ns += read.count_ns()
            self._lengths[read.length] += 1
        else:
            self.num_discarded += 1

    @property
    def lengths(self):
        """ Number of retained reads of each length. """
        lengths = pd.Series(self._lengths, dtype=int).sort_index()
        lengths.index.name = "Length"
        lengths.name = "Reads"
        return lengths

    def to_dict(self):
        return {"Number of reads": self.num_reads,
                "Number of reads retained": self.num_retained,
                "Number of reads discarded": self.num_discarded,
                "Number of singleton reads": self.num_singletons,
                "Number of bases trimmed from 5' ends": self.num_trimmed5,
                "Number of bases trimmed from 3' ends": self.num_trimmed3,
                "Number of ambiguous bases retained": self.num_ns}


def get_basename(fastq: Path):
    """ Name of a FASTQ file without its FASTQ or compression extension. """
    name = fastq.name
    for ext in (GZIP_EXT, BZIP2_EXT):
        name = name.removesuffix(ext)
    for ext in FQ_EXTS:
        name = name.removesuffix(ext)
    return name


def clean_reads(reads: Iterable[FastqRecord],
                cleaner: ReadCleaner,
                stats: CleanStats):
    """ Trim every read and yield it with whether it is retained. """
    for read in reads:
        trimmed = cleaner.trim(read)
        retained = cleaner.is_acceptable(read)
        stats.add(read, trimmed, retained)
        yield read, retained


def clean_pairs(pairs: Iterable[tuple[FastqRecord, FastqRecord]],
                cleaner: ReadCleaner,
                stats: CleanStats):
    """ Trim both mates of every pair and yield them with whether each
    mate is retained; a mate whose partner is not retained is counted
    as a singleton. """
    for mate1, mate2 in pairs:
        (_, retained1), (_, retained2) = clean_reads([mate1, mate2],
                                                     cleaner,
                                                     stats)
        if retained1 != retained2:
            stats.num_singletons += 1
        yield (mate1, retained1), (mate2, retained2)


def write_report(out_dir: Path,
                 basename: str,
                 files: list[Path],
                 encoding_in: QualityEncoding,
                 encoding_out: QualityEncoding,
                 cleaner: ReadCleaner,
                 stats: CleanStats):
    """ Write the distribution of read lengths to a CSV file and the
    settings and statistics of cleaning to a JSON file. """
    lengths_file = out_dir.joinpath(f"{basename}.{LENGTHS}{CSV_EXT}")
    with open(lengths_file, write_mode()) as f:
        stats.lengths.to_csv(f)
    report = {"Input files": list(map(str, files)),
              "Input quality encoding": encoding_in.name,
              "Input maximum quality": encoding_in.max_score,
              "Output quality encoding": encoding_out.name,
              "Output maximum quality": encoding_out.max_score,
              **cleaner.to_dict(),
              **stats.to_dict()}
    report_file = out_dir.joinpath(f"{basename}.{SETTINGS}{JSON_EXT}")
    with open(report_file, write_mode()) as f:
        json.dump(report, f, indent=4)
    return lengths_file, report_file


@with_tmp_dir(pass_keep_tmp=False)
def clean_fastq(fastq: Path,
                mate2: Path | None = None, *,
                interleaved: bool = False,
                out_dir: Path,
                basename: str = "",
                encoding_in: QualityEncoding,
                encoding_out: QualityEncoding,
                cleaner: ReadCleaner,
                force: bool = False,
                tmp_dir: Path):
    """ Clean one FASTQ file of single-end or interleaved paired-end
    reads, or two FASTQ files of mate 1 and mate 2 reads, and return
    the paths of the output files.

    All output files are written to tmp_dir and moved into out_dir only
    after every read has been cleaned, replacing any existing files.
    """
    if interleaved and mate2 is not None:
        raise IncompatibleOptionsError("Paired-end reads must be either "
                                       "interleaved or in two files, "
                                       "not both")
    paired = interleaved or mate2 is not None
    fastq = Path(fastq)
    if not basename:
        basename = get_basename(fastq)
    out_dir = Path(out_dir)
    report_file = out_dir.joinpath(f"{basename}.{SETTINGS}{JSON_EXT}")
    if not need_write(report_file, force):
        # The settings file is released last, so these reads are done.
        return [report_file]
    if paired:
        out_keys = PAIR1, PAIR2, SINGLETON, DISCARDED
    else:
        out_keys = TRUNCATED, DISCARDED
    tmp_files = {key: tmp_dir.joinpath(f"{basename}.{key}{OUT_FQ_EXT}")
                 for key in out_keys}
    in_files = [fastq] if mate2 is None else [fastq, Path(mate2)]
    logger.task(f"Cleaning {'paired' if paired else 'single'}-end reads "
                f"in {', '.join(map(str, in_files))}")
    stats = CleanStats()
    with ExitStack() as stack:
        readers = [stack.enter_context(closing(read_fastq(f, encoding_in)))
                   for f in in_files]
        outs = {key: stack.enter_context(open_fastq(tmp_file, write_mode()))
                for key, tmp_file in tmp_files.items()}
        if paired:
            pairs = (iter_interleaved_fastq(readers[0])
                     if interleaved
                     else iter_paired_fastq(*readers))
            for ((read1, retained1),
                 (read2, retained2)) in clean_pairs(pairs, cleaner, stats):
                if retained1 and retained2:
                    outs[PAIR1].write(read1.to_str(encoding_out))
                    outs[PAIR2].write(read2.to_str(encoding_out))
                    continue
                for read, retained in ((read1, retained1),
                                       (read2, retained2)):
                    out = outs[SINGLETON] if retained else outs[DISCARDED]
                    out.write(read.to_str(encoding_out))
        else:
            for read, retained in clean_reads(readers[0], cleaner, stats):
                out = outs[TRUNCATED] if retained else outs[DISCARDED]
                out.write(read.to_str(encoding_out))
    logger.status(f"Retained {stats.num_retained} of {stats.num_reads} reads "
                  f"in {', '.join(map(str, in_files))}")
    report_files = write_report(tmp_dir,
                                basename,
                                in_files,
                                encoding_in,
                                encoding_out,
                                cleaner,
                                stats)
    # The settings file must be released last.
    return [release_to_out(out_dir, tmp_dir, tmp_file)
            for tmp_file in [*tmp_files.values(), *report_files]]

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
