"""

Temporary Files Core Module

========================================================================

Write output files into a temporary directory, then move them into the
output directory only once they are complete, so that a failed run can
never leave partial output files behind.

"""

import errno
from functools import wraps
from pathlib import Path
from shutil import move, rmtree
from tempfile import mkdtemp
from typing import Callable

from .logs import logger


def randdir(parent: str | Path, prefix: str = ""):
    """ Make a new directory with a random name inside parent. """
    parent = Path(parent).absolute()
    parent.mkdir(parents=True, exist_ok=True)
    path = Path(mkdtemp(dir=parent, prefix=prefix))
    logger.action(f"Created directory {path}")
    return path


def release_to_out(out_dir: Path, release_dir: Path, initial_path: Path):
    """ Move a file from release_dir to the same relative path in
    out_dir, replacing any file already there, and return the new path.
    """
    out_path = Path(out_dir).joinpath(initial_path.relative_to(release_dir))
    out_path.parent.mkdir(parents=True, exist_ok=True)
    try:
        initial_path.replace(out_path)
    except OSError as error:
        if error.errno != errno.EXDEV:
            raise
        logger.warning("Non-atomic move: temporary and output directories "
                       f"are on different file systems; moving {initial_path}"
                       f" to {out_path} via copy-delete")
        move(initial_path, out_path)
    logger.action(f"Moved {initial_path} to {out_path}")
    return out_path


def with_tmp_dir(pass_keep_tmp: bool):
    """ Make a temporary directory, and delete it after returning. """

    def decorator(func: Callable):

        @wraps(func)
        def wrapper(*args,
                    tmp_pfx: str | Path,
                    keep_tmp: bool,
                    **kwargs):
            tmp_dir = None
            try:
                tmp_pfx = Path(tmp_pfx).absolute()
                tmp_dir = randdir(tmp_pfx.parent, prefix=tmp_pfx.name)
                if pass_keep_tmp:
                    kwargs = dict(keep_tmp=keep_tmp, **kwargs)
                return func(*args, tmp_dir=tmp_dir, **kwargs)
            finally:
                if tmp_dir is not None and not keep_tmp:
                    rmtree(tmp_dir, ignore_errors=True)
                    logger.action(f"Deleted directory {tmp_dir}")

        return wrapper

    return decorator

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
