import unittest as ut
from itertools import product

from fqclean.core.error import FormatError
from fqclean.core.seq.clean import (CLEANABLE,
                                    DNA_ALPH,
                                    clean_sequence)


class TestConstants(ut.TestCase):

    def test_dna_alph(self):
        self.assertEqual(DNA_ALPH, ("A", "C", "G", "T", "N"))

    def test_cleanable(self):
        self.assertEqual(CLEANABLE, frozenset("ACGTNacgtn."))


class TestCleanSequence(ut.TestCase):

    def test_clean(self):
        for bases in product("ACGTN", repeat=3):
            seq = "".join(bases)
            with self.subTest(seq=seq):
                self.assertIs(clean_sequence(seq), seq)

    def test_lowercase(self):
        self.assertEqual(clean_sequence("acgtn"), "ACGTN")
        self.assertEqual(clean_sequence("AcGtN"), "ACGTN")

    def test_no_call(self):
        self.assertEqual(clean_sequence("A.C"), "ANC")
        self.assertEqual(clean_sequence("..."), "NNN")

    def test_empty(self):
        self.assertEqual(clean_sequence(""), "")

    def test_invalid(self):
        for seq in ["ACGU", "ACGT ", "RYKM", "AC-GT", "acgx"]:
            with self.subTest(seq=seq):
                self.assertRaisesRegex(FormatError,
                                       "Invalid character",
                                       clean_sequence,
                                       seq)

    def test_invalid_listed(self):
        self.assertRaisesRegex(FormatError,
                               r"'AXCZ': XZ; only A, C, G, T and N",
                               clean_sequence,
                               "AXCZ")


if __name__ == "__main__":
    ut.main(verbosity=2)

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
