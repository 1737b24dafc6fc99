"""

Mate Pair Core Module

========================================================================

Check that two reads can be mates 1 and 2 of one paired-end read.

Mates share a name: the part of the header before the first space,
minus a suffix of /1 (mate 1) or /2 (mate 2), if any.

"""

from enum import Enum
from typing import Iterable, NamedTuple

from .fastq import FastqRecord
from ..error import PairError

NAME_DELIMITER = " "
MATE1_SUFFIX = "/1"
MATE2_SUFFIX = "/2"


class MateTag(Enum):
    """ Which mate a read claims to be, according to its header. """
    NONE = 0
    MATE1 = 1
    MATE2 = 2


MATE_SUFFIXES = {MATE1_SUFFIX: MateTag.MATE1,
                 MATE2_SUFFIX: MateTag.MATE2}


class MateInfo(NamedTuple):
    name: str
    mate: MateTag


def extract_mate_info(read: FastqRecord):
    """ Name of the read and the mate it claims to be. """
    name = read.header.split(NAME_DELIMITER, 1)[0]
    mate = MATE_SUFFIXES.get(name[-2:], MateTag.NONE)
    if mate is not MateTag.NONE:
        name = name[:-2]
    return MateInfo(name, mate)


def validate_paired_reads(mate1: FastqRecord, mate2: FastqRecord):
    """ Raise PairError unless mate1 and mate2 are non-empty reads with
    the same name and either no mate tags or the tags /1 and /2. """
    if not mate1.length or not mate2.length:
        raise PairError("Pair contains empty reads")
    info1 = extract_mate_info(mate1)
    info2 = extract_mate_info(mate2)
    if info1.name != info2.name:
        raise PairError("Pair contains reads with mismatching names: "
                        f"{repr(info1.name)} and {repr(info2.name)}")
    if info1.mate is not MateTag.NONE or info2.mate is not MateTag.NONE:
        if info1.mate is not MateTag.MATE1 or info2.mate is not MateTag.MATE2:
            raise PairError(f"Inconsistent mate numbering in pair "
                            f"{repr(info1.name)}: got {info1.mate.name} "
                            f"and {info2.mate.name}")


def iter_paired_fastq(reads1: Iterable[FastqRecord],
                      reads2: Iterable[FastqRecord]):
    """ Yield every pair of mates from two streams of reads, checking
    that the streams have equal lengths and that each pair is valid. """
    reads1 = iter(reads1)
    reads2 = iter(reads2)
    num_pairs = 0
    while True:
        mate1 = next(reads1, None)
        mate2 = next(reads2, None)
        if mate1 is None or mate2 is None:
            if mate1 is not mate2:
                more, fewer = (1, 2) if mate2 is None else (2, 1)
                raise PairError(f"Mate {more} reads outnumber mate {fewer} "
                                f"reads (which ended after {num_pairs} reads)")
            return
        validate_paired_reads(mate1, mate2)
        yield mate1, mate2
        num_pairs += 1


def iter_interleaved_fastq(reads: Iterable[FastqRecord]):
    """ Yield every pair of mates from one stream of reads in which the
    mates alternate. """
    reads = iter(reads)
    return iter_paired_fastq(reads, reads)

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
