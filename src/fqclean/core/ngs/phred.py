"""

Quality Score Core Module

========================================================================

Convert quality scores between the ASCII encodings found in FASTQ files
and the canonical Phred+33 alphabet in which FastqRecord stores them.

Two scales exist: the Phred scale, Q = -10 log10(p), and the older
Solexa scale, Q = -10 log10(p / (1 - p)). The two differ below a score
of about 13, so reading Solexa scores is lossy even if the output is
written with Solexa scores again.

Input is strict (any score outside the encoding is a FormatError) while
output is permissive (scores above the maximum are truncated to it).

"""

from enum import Enum
from functools import cache

import numpy as np

from ..error import FormatError
from ..logs import logger
from ..validate import require_between, require_isinstance

# Offset used by the Phred+33 and SAM encodings.
PHRED_OFFSET_33 = ord("!")
# Offset used by the Phred+64 and Solexa encodings.
PHRED_OFFSET_64 = ord("@")

# First and last printable characters that can encode a quality score.
MIN_QUAL = "!"
MAX_QUAL = "~"

MIN_PHRED_SCORE = 0
# Default maximum, for compatibility with older versions.
MAX_PHRED_SCORE_DEFAULT = 41
# Encodes to the last printable character with an offset of 33.
MAX_PHRED_SCORE = ord(MAX_QUAL) - PHRED_OFFSET_33

# Solexa scores, which encode to ';' through 'h' with an offset of 64.
MIN_SOLEXA_SCORE = -5
MAX_SOLEXA_SCORE = 40


def encode_phred(phred_score: int, phred_encoding: int):
    """
    Encode a numeric Phred quality score as an ASCII character.

    Parameters
    ----------
    phred_score : int
        The Phred score as an integer.
    phred_encoding : int
        The encoding offset for Phred scores. A Phred score is encoded
        as the character whose ASCII value is the sum of the phred score
        and the encoding offset.

    Returns
    -------
    str
        The character whose ASCII code, in the encoding scheme of the
        FASTQ file, represents the quality score.
    """
    return chr(phred_score + phred_encoding)


def decode_phred(quality_code: str, phred_encoding: int):
    """
    Decode the ASCII character for a Phred quality score to an integer.

    Parameters
    ----------
    quality_code : str
        The Phred score encoded as an ASCII character.
    phred_encoding : int
        The encoding offset for Phred scores.

    Returns
    -------
    int
        The Phred quality score represented by the ASCII character.
    """
    return ord(quality_code) - phred_encoding


def prob_to_phred(p: float | np.ndarray):
    """ Phred score(s) of error probabilities, truncated to integers and
    capped at the highest score that can be printed. """
    with np.errstate(divide="ignore"):
        scores = np.minimum(np.trunc(-10. * np.log10(p)), MAX_PHRED_SCORE)
    if np.ndim(scores):
        return scores.astype(int)
    return int(scores)


def phred_to_prob(phred: int | np.ndarray):
    """ Error probabilities of Phred score(s). """
    return np.power(10., -np.asarray(phred, dtype=float) / 10.)


def solexa_to_phred(solexa: int | np.ndarray):
    """ Round Solexa score(s) to the nearest Phred score(s). """
    scores = np.round(10. * np.log10(1. + np.power(10., np.asarray(solexa)
                                                   / 10.)))
    return np.maximum(scores, MIN_PHRED_SCORE).astype(int)


def phred_to_solexa(phred: int | np.ndarray):
    """ Round Phred score(s) to the nearest Solexa score(s). """
    # A Phred score of 0 (p = 1) has no finite Solexa score.
    with np.errstate(divide="ignore"):
        scores = np.round(10. * np.log10(np.power(10., np.asarray(phred)
                                                  / 10.) - 1.))
    return np.clip(scores, MIN_SOLEXA_SCORE, MAX_SOLEXA_SCORE).astype(int)


class QualityScale(Enum):
    """ Scale on which an encoding expresses quality scores. """
    PHRED = "Phred"
    SOLEXA = "Solexa"


class QualityEncoding(object):
    """
    Encoding of quality scores in FASTQ files.

    Parameters
    ----------
    offset: int
        ASCII code of the character that encodes a score of 0.
    max_score: int
        Highest score allowed in input and to which output is truncated.
    scale: QualityScale
        Scale of the scores: linear Phred or logarithmic Solexa.
    """
    __slots__ = ["_scale", "_offset", "_max_score"]

    def __init__(self,
                 offset: int = PHRED_OFFSET_33,
                 max_score: int = MAX_PHRED_SCORE_DEFAULT,
                 scale: QualityScale = QualityScale.PHRED):
        require_isinstance("scale", scale, QualityScale)
        require_isinstance("offset", offset, int)
        require_isinstance("max_score", max_score, int)
        match scale:
            case QualityScale.PHRED:
                if offset not in (PHRED_OFFSET_33, PHRED_OFFSET_64):
                    raise ValueError("Phred offset must be "
                                     f"{PHRED_OFFSET_33} or {PHRED_OFFSET_64}, "
                                     f"but got {offset}")
                # Every encoded score must be a printable character.
                require_between("max_score",
                                max_score,
                                MIN_PHRED_SCORE,
                                ord(MAX_QUAL) - offset)
            case QualityScale.SOLEXA:
                if offset != PHRED_OFFSET_64:
                    raise ValueError(f"Solexa offset must be {PHRED_OFFSET_64}, "
                                     f"but got {offset}")
                require_between("max_score",
                                max_score,
                                MIN_PHRED_SCORE,
                                MAX_SOLEXA_SCORE)
        self._scale = scale
        self._offset = offset
        self._max_score = max_score

    @property
    def scale(self):
        return self._scale

    @property
    def offset(self):
        return self._offset

    @property
    def max_score(self):
        """ Highest score allowed in input and output. """
        return self._max_score

    @property
    def min_score(self):
        """ Lowest score allowed in input. """
        if self._scale is QualityScale.SOLEXA:
            return MIN_SOLEXA_SCORE
        return MIN_PHRED_SCORE

    @property
    def name(self):
        """ Standard name of the encoding.

        The name depends only on the scores that the encoding accepts,
        like equality does: every Phred+33 encoding with a maximum of
        93 is "Phred+33 (SAM)", and every other is "Phred+33", whether
        made by phred33() or phred33_sam().
        """
        if self._scale is QualityScale.SOLEXA:
            return self._scale.value
        name = f"{self._scale.value}+{self._offset}"
        if self._offset == PHRED_OFFSET_33 and self._max_score == MAX_PHRED_SCORE:
            return f"{name} (SAM)"
        return name

    def _to_phred33(self, raw: np.ndarray):
        """ Phred+33 codes of valid raw codes. """
        scores = raw - self._offset
        if self._scale is QualityScale.SOLEXA:
            scores = solexa_to_phred(scores)
        return scores + PHRED_OFFSET_33

    def _from_phred33(self, codes: np.ndarray):
        """ Raw codes of Phred+33 codes, truncated to the maximum. """
        scores = np.clip(codes - PHRED_OFFSET_33,
                         MIN_PHRED_SCORE,
                         self._max_score)
        if self._scale is QualityScale.SOLEXA:
            scores = phred_to_solexa(scores)
        return scores + self._offset

    def invalid_quality(self, char: str):
        """ Error for a character that does not encode a valid score. """
        if not MIN_QUAL <= char <= MAX_QUAL:
            return FormatError("Found non-printable character "
                               f"{repr(char)} in quality string")
        score = decode_phred(char, self._offset)
        if score < self.min_score:
            return FormatError(
                f"Quality score {repr(char)} ({score}) is below the minimum "
                f"({self.min_score}) for {self.name}; the data may be encoded "
                f"with a lower offset (e.g. Phred+33)"
            )
        return FormatError(
            f"Quality score {repr(char)} ({score}) is above the maximum "
            f"({self._max_score}) for {self.name}; the data may be encoded "
            f"with a higher offset (e.g. Phred+64), or the maximum must be "
            f"raised with --quality-max"
        )

    def decode(self, raw: str):
        """ Decode one quality character into the Phred+33 alphabet. """
        return chr(get_decode_table(self)[ord(raw)])

    def encode(self, internal: str):
        """ Encode one Phred+33 character into this encoding. """
        return internal.translate(get_encode_table(self))

    def decode_string(self, quals: str):
        """ Check and decode a string of quality characters into the
        Phred+33 alphabet in one pass. """
        return quals.translate(get_decode_table(self))

    def encode_string(self, quals: str):
        """ Encode a string of Phred+33 characters. """
        return quals.translate(get_encode_table(self))

    def _key(self):
        return self._scale, self._offset, self._max_score

    def __eq__(self, other):
        if not isinstance(other, QualityEncoding):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self):
        return hash(self._key())

    def __str__(self):
        return self.name

    def __repr__(self):
        return (f"{type(self).__name__}(offset={self._offset}, "
                f"max_score={self._max_score}, scale={self._scale})")


class DecodeTable(dict):
    """ Translation table for str.translate that raises FormatError for
    every character outside the encoding. """
    __slots__ = ["encoding"]

    def __init__(self, encoding: QualityEncoding):
        raw = np.arange(encoding.offset + encoding.min_score,
                        encoding.offset + encoding.max_score + 1)
        super().__init__(zip(raw.tolist(),
                             encoding._to_phred33(raw).tolist(),
                             strict=True))
        self.encoding = encoding

    def __missing__(self, code: int):
        raise self.encoding.invalid_quality(chr(code))


@cache
def get_decode_table(encoding: QualityEncoding):
    """ Table from raw codes to Phred+33 codes. """
    logger.detail(f"Built table to decode {encoding} quality scores")
    return DecodeTable(encoding)


@cache
def get_encode_table(encoding: QualityEncoding):
    """ Table from Phred+33 codes to raw codes. """
    codes = np.arange(ord(MIN_QUAL), ord(MAX_QUAL) + 1)
    logger.detail(f"Built table to encode {encoding} quality scores")
    return dict(zip(codes.tolist(),
                    encoding._from_phred33(codes).tolist(),
                    strict=True))


def phred33(max_score: int = MAX_PHRED_SCORE_DEFAULT):
    """ Phred scores with an offset of 33 (Sanger, Illumina 1.8+). """
    return QualityEncoding(PHRED_OFFSET_33, max_score)


def phred33_sam(max_score: int = MAX_PHRED_SCORE):
    """ Phred+33 scores spanning the full printable range (SAM).

    Identical to phred33(max_score); with a maximum below 93, the
    encoding is named plain "Phred+33".
    """
    return QualityEncoding(PHRED_OFFSET_33, max_score)


def phred64(max_score: int = MAX_PHRED_SCORE_DEFAULT):
    """ Phred scores with an offset of 64 (Illumina 1.3 to 1.7). """
    return QualityEncoding(PHRED_OFFSET_64, max_score)


def solexa(max_score: int = MAX_SOLEXA_SCORE):
    """ Solexa scores with an offset of 64 (Solexa, Illumina 1.0). """
    return QualityEncoding(PHRED_OFFSET_64, max_score, QualityScale.SOLEXA)


ENCODINGS = {"33": phred33,
             "64": phred64,
             "solexa": solexa,
             "sam": phred33_sam}

# Highest maximum score that each encoding allows.
MAX_SCORES = {"33": MAX_PHRED_SCORE,
              "64": ord(MAX_QUAL) - PHRED_OFFSET_64,
              "solexa": MAX_SOLEXA_SCORE,
              "sam": MAX_PHRED_SCORE}


def get_encoding(name: str,
                 max_score: int | None = None,
                 clip: bool = False):
    """
    Make the encoding with the given name (one of 33, 64, solexa, or
    sam) and, optionally, a maximum score other than its default.

    Parameters
    ----------
    name: str
        Name of the encoding (case-insensitive).
    max_score: int | None
        Maximum score, or None for the default of the encoding.
    clip: bool
        If max_score exceeds the highest that the encoding allows, use
        that highest score instead of raising ValueError.

    Returns
    -------
    QualityEncoding
        The encoding.
    """
    key = str(name).lower()
    try:
        factory = ENCODINGS[key]
    except KeyError:
        raise ValueError(f"Quality encoding must be one of {list(ENCODINGS)}, "
                         f"but got {repr(name)}") from None
    if clip and max_score is not None and max_score > MAX_SCORES[key]:
        logger.warning(f"Maximum score {max_score} exceeds the highest "
                       f"for quality encoding {repr(name)}; using "
                       f"{MAX_SCORES[key]}")
        max_score = MAX_SCORES[key]
    encoding = factory() if max_score is None else factory(max_score)
    logger.routine(f"Using quality encoding {encoding}, "
                   f"maximum score {encoding.max_score}")
    return encoding
