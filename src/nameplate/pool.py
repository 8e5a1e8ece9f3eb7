""" Bounded pool of reusable expression engines.

Engines aren't thread-safe, so each evaluation borrows one for its exclusive
use and hands it back afterwards. Borrowing never fails: if no engine frees up
within the timeout a fresh one is built. Handing back never blocks: if the
pool is already full the engine is dropped. """

import queue
import logging
import threading
import contextlib
from typing import Callable, Iterator, Optional

from nameplate import util
from nameplate.engine import ExpressionEngine, SimpleEvalEngine

DEFAULT_POOL_SIZE = 10
DEFAULT_BORROW_TIMEOUT = 1.0

class EnginePool:
    def __init__(
        self,
        factory:Callable[[], ExpressionEngine]=SimpleEvalEngine,
        size:int=DEFAULT_POOL_SIZE,
        timeout:float=DEFAULT_BORROW_TIMEOUT,
    ) -> None:
        if size < 1:
            raise ValueError(f'pool size must be at least 1, got {size}')
        if timeout < 0:
            raise ValueError(f'borrow timeout must be non-negative, got {timeout}')

        self.logger = logging.getLogger(util.fullname(self))
        self.factory = factory
        self.capacity = size
        self.timeout = timeout

        self._idle:queue.Queue[ExpressionEngine] = queue.Queue(maxsize=size)
        for _ in range(size):
            self._idle.put_nowait(factory())

        self._counter_lock = threading.Lock()
        # engines built because the pool was empty past the timeout
        self.overflow_created = 0
        # engines dropped because the pool was full when they came back
        self.discarded = 0

    @property
    def idle_count(self) -> int:
        """ approximate, other threads may be borrowing or releasing """
        return self._idle.qsize()

    def borrow(self, timeout:Optional[float]=None) -> ExpressionEngine:
        if timeout is None:
            timeout = self.timeout
        try:
            return self._idle.get(timeout=timeout)
        except queue.Empty:
            pass

        self.logger.debug(f'no idle engine after {timeout}s, building a new one')
        with self._counter_lock:
            self.overflow_created += 1
        return self.factory()

    def release(self, engine:ExpressionEngine) -> bool:
        """ Returns engine to the pool, True if it was kept. """
        try:
            self._idle.put_nowait(engine)
            return True
        except queue.Full:
            pass

        with self._counter_lock:
            self.discarded += 1
        self.logger.warning(f'engine pool is full ({self.capacity}), discarding engine')
        return False

    @contextlib.contextmanager
    def engine(self, timeout:Optional[float]=None) -> Iterator[ExpressionEngine]:
        engine = self.borrow(timeout)
        try:
            yield engine
        finally:
            self.release(engine)
