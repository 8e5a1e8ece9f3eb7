import re
import time
import threading
from collections.abc import Mapping
from typing import Any, List, Optional, Iterable

from nameplate.engine import ExpressionEngine, SimpleEvalEngine
from nameplate.placeholders import PlaceholderResolver

class FakeClock:
    """ Manually advanced stand in for time.monotonic """

    def __init__(self, now:float=1000.) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, dt:float) -> None:
        self.now += dt

class EngineMonitor:
    """ Shared bookkeeping for the engines built by one test. """

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.created = 0
        self.evaluations = 0
        self.expressions:List[str] = []
        self.violations:List[str] = []

class MonitoringEngine(ExpressionEngine):
    """ Real engine that counts evaluations and checks it is only ever held by
    one thread at a time. """

    def __init__(self, monitor:EngineMonitor, hold:float=0.) -> None:
        self.monitor = monitor
        self.hold = hold
        self.inner = SimpleEvalEngine()
        self.owner:Optional[int] = None
        with monitor.lock:
            monitor.created += 1

    def evaluate(self, expression:str, context:Mapping[str, Any]) -> Any:
        me = threading.get_ident()
        if self.owner is not None:
            with self.monitor.lock:
                self.monitor.violations.append(f'{me} found engine held by {self.owner}')
        self.owner = me
        try:
            with self.monitor.lock:
                self.monitor.evaluations += 1
                self.monitor.expressions.append(expression)
            if self.hold > 0:
                time.sleep(self.hold)
            return self.inner.evaluate(expression, context)
        finally:
            if self.owner != me:
                with self.monitor.lock:
                    self.monitor.violations.append(f'{me} lost engine to {self.owner}')
            self.owner = None

class FailingEngine(ExpressionEngine):
    def evaluate(self, expression:str, context:Mapping[str, Any]) -> Any:
        raise RuntimeError("engine exploded")

class SubjectResolver(PlaceholderResolver):
    """ Substitutes bare identifiers with the subject's values for them. """

    IDENTIFIER_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")

    def __init__(self) -> None:
        self.calls = 0

    def resolve(self, text:str, subject:Any) -> str:
        self.calls += 1
        def replace(match:re.Match) -> str:
            name = match.group(0)
            if name in subject:
                return repr(subject[name])
            return name
        return self.IDENTIFIER_RE.sub(replace, text)

class FakePlayer:
    def __init__(self, name:str) -> None:
        self.name = name

class FakeServer:
    def __init__(self, names:Iterable[str]) -> None:
        self.players = {name: FakePlayer(name) for name in names}

    def get_player_exact(self, name:str) -> Optional[FakePlayer]:
        return self.players.get(name)

    def online_players(self) -> Iterable[FakePlayer]:
        return self.players.values()

class ChurningServer(FakeServer):
    """ A server whose player list changes while we read it. """

    def online_players(self) -> Iterable[FakePlayer]:
        for player in self.players.values():
            yield player
            self.players[f'{player.name}_alt'] = FakePlayer(f'{player.name}_alt')
