import os
import pathlib
from datetime import datetime
from typing import Iterable

from click import Argument, Choice, Option, Parameter, Path

from ..ngs.phred import ENCODINGS, MAX_SCORES

# System information
CWD = os.getcwd()

DEFAULT_QUALITY_BASE = "33"
DEFAULT_MIN_QUALITY = 2
DEFAULT_MIN_LENGTH = 15
DEFAULT_MAX_NS = 1000

# Input files

arg_fastq = Argument(
    ("fastq",),
    type=Path(exists=True, dir_okay=False),
    nargs=1,
    required=True
)

opt_mate2 = Option(
    ("--mate2", "-2"),
    type=Path(exists=True, dir_okay=False),
    default=None,
    help="Treat FASTQ as mate 1 reads and this file as mate 2 reads"
)

opt_interleaved = Option(
    ("--interleaved/--separate",),
    type=bool,
    default=False,
    help="Treat FASTQ as paired-end reads with mates 1 and 2 interleaved"
)

# Input/output options

opt_out_dir = Option(
    ("--out-dir", "-o"),
    type=Path(file_okay=False),
    default=os.path.join(".", "out"),
    help="Write all output files to this directory"
)

opt_basename = Option(
    ("--basename", "-b"),
    type=str,
    default="",
    help="Prefix the names of output files with this basename "
         "(default: the name of the input FASTQ file)"
)

opt_force = Option(
    ("--force/--no-force",),
    type=bool,
    default=False,
    help="Force all tasks to run, overwriting any existing output files"
)

opt_tmp_pfx = Option(
    ("--tmp-pfx", "-t"),
    type=Path(file_okay=False),
    default=os.path.join(".", "tmp-"),
    help="Write all temporary files to a directory with this prefix"
)

opt_keep_tmp = Option(
    ("--keep-tmp/--erase-tmp",),
    type=bool,
    default=False,
    help="Keep temporary files after finishing"
)

# Quality score encoding options

opt_quality_base = Option(
    ("--quality-base",),
    type=Choice(list(ENCODINGS), case_sensitive=False),
    default=DEFAULT_QUALITY_BASE,
    help="Quality score encoding of input FASTQ files"
)

opt_quality_base_out = Option(
    ("--quality-base-out",),
    type=Choice(list(ENCODINGS), case_sensitive=False),
    default=None,
    help="Quality score encoding of output FASTQ files "
         "(default: same as --quality-base)"
)

opt_quality_max = Option(
    ("--quality-max",),
    type=int,
    default=None,
    help="Reject input and truncate output with quality scores above "
         "this maximum, at most "
         + ", ".join(f"{max_score} for {name}"
                     for name, max_score in MAX_SCORES.items())
         + "; a maximum above the limit of the output encoding is "
           "lowered to that limit (default: depends on the encoding)"
)

# Trimming and filtering options

opt_trim_qualities = Option(
    ("--trim-qualities/--no-trim-qualities",),
    type=bool,
    default=False,
    help="Trim bases with quality scores at most --min-quality from the "
         "5' and 3' ends of reads"
)

opt_min_quality = Option(
    ("--min-quality",),
    type=int,
    default=DEFAULT_MIN_QUALITY,
    help="Highest quality score considered low quality by --trim-qualities"
)

opt_trim_ns = Option(
    ("--trim-ns/--no-trim-ns",),
    type=bool,
    default=False,
    help="Trim ambiguous bases (N) from the 5' and 3' ends of reads"
)

opt_trim5p = Option(
    ("--trim5p",),
    type=int,
    default=0,
    help="Trim this many bases from the 5' end of every read"
)

opt_trim3p = Option(
    ("--trim3p",),
    type=int,
    default=0,
    help="Trim this many bases from the 3' end of every read"
)

opt_min_length = Option(
    ("--min-length",),
    type=int,
    default=DEFAULT_MIN_LENGTH,
    help="Discard reads shorter than this length after trimming"
)

opt_max_ns = Option(
    ("--max-ns",),
    type=int,
    default=DEFAULT_MAX_NS,
    help="Discard reads with more than this many ambiguous bases (N) "
         "after trimming"
)

# Logging options

opt_verbose = Option(
    ("--verbose", "-v"),
    count=True,
    help="Log more messages (-v, -vv, or -vvv) on stderr"
)

opt_quiet = Option(
    ("--quiet", "-q"),
    count=True,
    help="Log fewer messages (-q, -qq, or -qqq) on stderr"
)

opt_log = Option(
    ("--log",),
    type=Path(exists=False, dir_okay=False),
    default=os.path.join(CWD, "log", datetime.now().strftime(
        "fqclean_%Y-%m-%d_%H-%M-%S.log"
    )),
    help="Log all messages to a file"
)

opt_log_color = Option(
    ("--log-color/--log-plain",),
    type=bool,
    default=True,
    help="Log messages with or without color codes on stderr"
)

opt_exit_on_error = Option(
    ("--exit-on-error/--log-on-error",),
    type=bool,
    default=False,
    help="Exit when an error occurs instead of only logging it"
)


def merge_params(*param_lists: list[Parameter],
                 exclude: Iterable[Parameter] = ()):
    """ Merge lists of Click parameters, dropping duplicates. """
    exclude_names = {param.name for param in exclude}
    params = list()
    names = set()
    for param_list in param_lists:
        for param in param_list:
            if param.name not in names and param.name not in exclude_names:
                params.append(param)
                names.add(param.name)
    return params


def optional_path(path_or_none: pathlib.Path | str | None):
    if isinstance(path_or_none, pathlib.Path):
        return path_or_none
    if path_or_none:
        return pathlib.Path(path_or_none)
    return None

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
