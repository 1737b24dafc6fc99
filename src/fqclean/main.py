from pathlib import Path

from click import group, version_option

from . import clean, test, __version__
from .core.arg import (opt_exit_on_error,
                       opt_log,
                       opt_log_color,
                       opt_quiet,
                       opt_verbose)
from .core.logs import logger, set_config

params = [
    opt_verbose,
    opt_quiet,
    opt_log,
    opt_log_color,
    opt_exit_on_error,
]


@group(params=params, context_settings={"show_default": True})
@version_option(__version__)
def cli(verbose: int,
        quiet: int,
        log: str | Path,
        log_color: bool,
        exit_on_error: bool):
    """ Command line interface of FQClean. """
    if log:
        log_file_path = Path(log).absolute()
        log_file_path.parent.mkdir(parents=True, exist_ok=True)
    else:
        log_file_path = None
    set_config(verbose - quiet, log_file_path, log_color, exit_on_error)
    logger.detail(f"This is FQClean version {__version__}")


for module in [clean, test]:
    cli.add_command(module.main.cli)

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
