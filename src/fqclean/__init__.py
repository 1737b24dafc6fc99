"""

FQClean
========================================================================

Expose the sub-packages ``core`` and ``clean``, plus the ``__version__``
attribute, at the top level so that they can be imported from external
modules and scripts::

    >>> import fqclean
    >>> fqclean.__version__
    'x.y.z'

"""

from . import core, clean
from .core.version import __version__
