""" Conditional display expressions.

Labels shown to players can carry conditions, e.g. only show a rank line when
"%player_level% >= 10". Those conditions get evaluated for every player many
times a second from whatever thread the host happens to be running on, so
evaluation goes:

 * resolve placeholders against the player
 * normalize locale specific number literals ("1.234,5" => "1234.5")
 * look up the normalized text in a short lived result cache
 * on a miss, borrow an engine from the pool, evaluate, cache the result

Evaluation never raises. Anything that goes wrong makes the condition false,
and each distinct broken expression is logged once.
"""

import logging
import threading
import dataclasses
from collections.abc import Iterable, Mapping
from typing import Any, Optional, Set

from nameplate import config, util
from nameplate.cache import ResultCache
from nameplate.literals import normalize_number_literals
from nameplate.placeholders import PlaceholderResolver, PassthroughResolver
from nameplate.pool import EnginePool

@dataclasses.dataclass(frozen=True)
class ConditionalModifier:
    """ A condition as authored, placeholders and all. """
    expression:str

class FailureLog:
    """ Remembers which expressions already failed so we only log them once. """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._expressions:Set[str] = set()

    def add(self, expression:str) -> bool:
        """ Records expression, True iff it wasn't recorded before. """
        with self._lock:
            if expression in self._expressions:
                return False
            self._expressions.add(expression)
            return True

    def __contains__(self, expression:object) -> bool:
        with self._lock:
            return expression in self._expressions

    def __len__(self) -> int:
        return len(self._expressions)

class ConditionEvaluator:
    def __init__(
        self,
        resolver:Optional[PlaceholderResolver]=None,
        pool:Optional[EnginePool]=None,
        cache:Optional[ResultCache]=None,
        failures:Optional[FailureLog]=None,
        context:Optional[Mapping[str, Any]]=None,
    ) -> None:
        self.logger = logging.getLogger(util.fullname(self))
        self.resolver:PlaceholderResolver = resolver if resolver is not None else PassthroughResolver()
        self.pool = pool if pool is not None else EnginePool()
        self.cache = cache if cache is not None else ResultCache()
        self.failures = failures if failures is not None else FailureLog()
        # shared by every evaluation, not per subject
        self.context:Mapping[str, Any] = context if context is not None else {}

    def _resolve(self, expression:str, subject:Any) -> str:
        if not self.resolver.enabled:
            return expression
        return self.resolver.resolve(expression, subject)

    def evaluate(self, modifier:ConditionalModifier, subject:Any) -> bool:
        raw = modifier.expression
        normalized = raw
        try:
            normalized = normalize_number_literals(self._resolve(raw, subject))

            cached = self.cache.get(normalized)
            if cached is not None:
                return cached

            # the engine goes back to the pool even if evaluation raises
            with self.pool.engine() as engine:
                result = engine.evaluate(normalized, self.context)
                value = isinstance(result, bool) and result
                self.cache.put(normalized, value)
            return value
        except Exception as e:
            if self.failures.add(raw):
                self.logger.warning(f'failed to evaluate expression "{raw}" (resolved to "{normalized}"): {e}')
            return False

    def evaluate_all(self, modifiers:Iterable[ConditionalModifier], subject:Any) -> bool:
        """ True iff every modifier holds for subject (vacuously for none). """
        return all(self.evaluate(modifier, subject) for modifier in modifiers)

def create_evaluator(
    resolver:Optional[PlaceholderResolver]=None,
    context:Optional[Mapping[str, Any]]=None,
) -> ConditionEvaluator:
    """ Builds an evaluator sized and timed according to config.Settings. """

    settings = config.Settings
    if resolver is None or not settings.placeholders.ENABLED:
        resolver = PassthroughResolver()

    return ConditionEvaluator(
        resolver=resolver,
        pool=EnginePool(
            size=settings.conditions.POOL_SIZE,
            timeout=settings.conditions.BORROW_TIMEOUT,
        ),
        cache=ResultCache(ttl=settings.conditions.CACHE_TTL),
        context=context,
    )
