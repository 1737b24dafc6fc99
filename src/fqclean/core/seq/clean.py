"""

Sequence Cleaning Core Module

========================================================================

Validate and normalize the nucleotide sequences of FASTQ records.

"""

from ..error import FormatError

BASEA = "A"
BASEC = "C"
BASEG = "G"
BASET = "T"
BASEN = "N"
# Some instruments write no-calls as periods instead of N.
NO_CALL = "."

DNA_ALPH = BASEA, BASEC, BASEG, BASET, BASEN
DNA_ALPHASET = frozenset(DNA_ALPH)

# Lowercase bases become uppercase; no-calls become N.
CLEAN_TRANS = str.maketrans({**{base.lower(): base for base in DNA_ALPH},
                             NO_CALL: BASEN})
CLEANABLE = DNA_ALPHASET | frozenset(map(chr, CLEAN_TRANS))


def clean_sequence(seq: str):
    """ Return the sequence with lowercase bases made uppercase and
    no-calls (.) replaced with N; raise FormatError if the sequence has
    any characters besides A, C, G, T, and N (in either case) and '.'.
    """
    if inv := set(seq) - DNA_ALPHASET:
        # Translate only if the sequence has characters to clean.
        if inv := inv - CLEANABLE:
            raise FormatError("Invalid character(s) in FASTQ sequence "
                              f"{repr(seq)}: {''.join(sorted(inv))}; only "
                              f"A, C, G, T and N are expected")
        return seq.translate(CLEAN_TRANS)
    return seq

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
