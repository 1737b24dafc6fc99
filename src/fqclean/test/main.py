import unittest as ut
from os.path import dirname

from click import command

from ..core.arg import CMD_TEST, opt_verbose
from ..core.logs import Level, restore_config, set_config
from ..core.run import run_func


@run_func(CMD_TEST, default=None)
@restore_config
def run(verbose: int):
    """ Run all unit tests. """
    # Write no log file, suppress warnings, and exit on errors.
    set_config(verbosity=Level.ERROR,
               log_file_path=None,
               exit_on_error=True)
    main_dir = dirname(dirname(__file__))
    # Discovering from the parent of the package lets test modules use
    # relative and absolute imports of fqclean alike.
    suite = ut.TestLoader().discover(main_dir,
                                     pattern="*test.py",
                                     top_level_dir=dirname(main_dir))
    runner = ut.TextTestRunner(verbosity=verbose)
    result = runner.run(suite)
    if not result.wasSuccessful():
        raise RuntimeError(
            f"Some tests did not succeed ({len(result.failures)} failures, "
            f"{len(result.errors)} errors)"
        )


params = [opt_verbose]


@command(CMD_TEST, params=params)
def cli(**kwargs):
    """ Run all unit tests. """
    return run(**kwargs)


if __name__ == "__main__":
    run(verbose=2)
