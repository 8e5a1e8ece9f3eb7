""" Utility methods broadly applicable across the codebase. """

import bisect
from typing import Any, Iterable

def fullname(o:Any) -> str:
    """ Fully qualified class name of o, used to name loggers.

    Python makes no guarantees that __module__ is defined, and the module name
    is excluded from __qualname__, so we assemble it ourselves.

    from https://stackoverflow.com/a/2020083/553580
    """

    if isinstance(o, type):
        klass = o
    else:
        klass = o.__class__

    module = klass.__module__
    if module is None or module == str.__class__.__module__:
        return klass.__qualname__  # Avoid reporting builtins
    else:
        return module + '.' + klass.__qualname__

def tab_complete(partial:str, current:str, options:Iterable[str]) -> str:
    """ Tab completion of partial given options.

    current is the last completion offered (or empty), so repeated calls
    cycle through the options that start with partial. """

    options = sorted(options)
    if not current:
        current = partial

    i = bisect.bisect(options, current)
    if i == len(options):
        return partial
    if options[i].startswith(partial):
        return options[i]
    return partial
