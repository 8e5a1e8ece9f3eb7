""" Placeholder substitution ahead of condition evaluation.

Conditions reference per-player values through placeholders, e.g.
"%player_level% > 10". Resolving them is the job of the host's placeholder
system; these classes are the seam the evaluator talks to. """

import abc
import re
from collections.abc import Mapping
from typing import Any, Callable, Optional

PLACEHOLDER_RE = re.compile(r"%([A-Za-z0-9_:.\-]+)%")

class PlaceholderResolver(abc.ABC):
    @property
    def enabled(self) -> bool:
        return True

    @abc.abstractmethod
    def resolve(self, text:str, subject:Any) -> str: ...

class PassthroughResolver(PlaceholderResolver):
    """ Used when no placeholder system is available. """

    @property
    def enabled(self) -> bool:
        return False

    def resolve(self, text:str, subject:Any) -> str:
        return text

def attribute_lookup(subject:Any, name:str) -> Optional[Any]:
    """ Reads name from subject as a mapping key or an attribute. """
    if isinstance(subject, Mapping):
        return subject.get(name)
    return getattr(subject, name, None)

class PercentPlaceholderResolver(PlaceholderResolver):
    """ Replaces %name% tokens with values looked up on the subject.

    Placeholders the lookup doesn't know (returns None for) are left in the
    text as they were written. """

    def __init__(self, lookup:Callable[[Any, str], Optional[Any]]=attribute_lookup) -> None:
        self.lookup = lookup

    def resolve(self, text:str, subject:Any) -> str:
        def replace(match:re.Match) -> str:
            value = self.lookup(subject, match.group(1))
            if value is None:
                return match.group(0)
            return str(value)
        return PLACEHOLDER_RE.sub(replace, text)
