from pathlib import Path

from click import command

from .clean import ReadCleaner, clean_fastq
from ..core.arg import (CMD_CLEAN,
                        arg_fastq,
                        opt_mate2,
                        opt_interleaved,
                        opt_out_dir,
                        opt_basename,
                        opt_force,
                        opt_tmp_pfx,
                        opt_keep_tmp,
                        opt_quality_base,
                        opt_quality_base_out,
                        opt_quality_max,
                        opt_trim_qualities,
                        opt_min_quality,
                        opt_trim_ns,
                        opt_trim5p,
                        opt_trim3p,
                        opt_min_length,
                        opt_max_ns,
                        merge_params,
                        optional_path)
from ..core.ngs.phred import get_encoding
from ..core.run import run_func


@run_func(CMD_CLEAN)
def run(fastq: str | Path, *,
        mate2: str | Path | None = None,
        interleaved: bool = False,
        out_dir: str | Path = opt_out_dir.default,
        basename: str = opt_basename.default,
        force: bool = opt_force.default,
        tmp_pfx: str | Path = opt_tmp_pfx.default,
        keep_tmp: bool = opt_keep_tmp.default,
        quality_base: str = opt_quality_base.default,
        quality_base_out: str | None = opt_quality_base_out.default,
        quality_max: int | None = opt_quality_max.default,
        trim_qualities: bool = opt_trim_qualities.default,
        min_quality: int = opt_min_quality.default,
        trim_ns: bool = opt_trim_ns.default,
        trim5p: int = opt_trim5p.default,
        trim3p: int = opt_trim3p.default,
        min_length: int = opt_min_length.default,
        max_ns: int = opt_max_ns.default):
    """ Trim and filter reads in FASTQ files and rewrite their quality
    scores in another encoding. """
    # Build the encodings once and share them among all reads.
    encoding_in = get_encoding(quality_base, quality_max)
    encoding_out = get_encoding(quality_base_out or quality_base,
                                quality_max,
                                clip=True)
    cleaner = ReadCleaner(trim_qualities=trim_qualities,
                          min_quality=min_quality,
                          trim_ns=trim_ns,
                          trim5p=trim5p,
                          trim3p=trim3p,
                          min_length=min_length,
                          max_ns=max_ns)
    return clean_fastq(Path(fastq),
                       optional_path(mate2),
                       interleaved=interleaved,
                       out_dir=Path(out_dir),
                       basename=basename,
                       encoding_in=encoding_in,
                       encoding_out=encoding_out,
                       cleaner=cleaner,
                       force=force,
                       tmp_pfx=tmp_pfx,
                       keep_tmp=keep_tmp)


input_params = [
    arg_fastq,
    opt_mate2,
    opt_interleaved,
    opt_quality_base,
]

output_params = [
    opt_out_dir,
    opt_basename,
    opt_quality_base_out,
    opt_quality_max,
    opt_force,
    opt_tmp_pfx,
    opt_keep_tmp,
]

trim_params = [
    opt_trim_qualities,
    opt_min_quality,
    opt_trim_ns,
    opt_trim5p,
    opt_trim3p,
    opt_min_length,
    opt_max_ns,
]

params = merge_params(input_params, output_params, trim_params)


@command(CMD_CLEAN, params=params)
def cli(*args, **kwargs):
    """ Trim and filter reads in FASTQ files. """
    return run(*args, **kwargs)

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
