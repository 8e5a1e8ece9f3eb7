import types
from typing import Generator

import pytest

from nameplate import config
from nameplate.cache import ResultCache
from nameplate.conditions import ConditionEvaluator, FailureLog
from nameplate.pool import EnginePool
from . import FakeClock, EngineMonitor, MonitoringEngine, SubjectResolver

@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()

@pytest.fixture
def monitor() -> EngineMonitor:
    return EngineMonitor()

@pytest.fixture
def pool(monitor:EngineMonitor) -> EnginePool:
    return EnginePool(lambda: MonitoringEngine(monitor), size=3, timeout=0.05)

@pytest.fixture
def cache(clock:FakeClock) -> ResultCache:
    return ResultCache(ttl=300., clock=clock)

@pytest.fixture
def resolver() -> SubjectResolver:
    return SubjectResolver()

@pytest.fixture
def evaluator(resolver:SubjectResolver, pool:EnginePool, cache:ResultCache) -> ConditionEvaluator:
    return ConditionEvaluator(resolver=resolver, pool=pool, cache=cache, failures=FailureLog())

@pytest.fixture
def settings() -> Generator[types.SimpleNamespace, None, None]:
    """ config.Settings, restored to the built-in config afterwards """
    yield config.Settings
    config.load_config()
