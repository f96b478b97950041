"""Question: one lazily started, memoized, cancellable question/answer exchange."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Generator, Generic, TypeVar

from formterm.cancellation import CancelToken, LinkedCancelToken
from formterm.errors import CancellationError
from formterm.model.question import QuestionConfig

if TYPE_CHECKING:
    from formterm.asker.base import Asker

logger = logging.getLogger(__name__)

T = TypeVar("T")


class QuestionState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    RESOLVED = "resolved"
    REJECTED = "rejected"


@dataclass(frozen=True)
class QuestionContext:
    """Execution context supplied by the caller of an asker method.

    *signal* is an outer cancellation token; the question observes it but
    never cancels it.
    """

    signal: CancelToken | None = None


class Question(Generic[T]):
    """A single-shot future for one question/answer exchange.

    Nothing happens until the question is first awaited (or :meth:`start`
    is called). The first force runs :meth:`run` as a task; every later
    await observes the same outcome. The run is raced against the
    question's cancellation signal, which fires when either the outer
    signal from the context or the question's own token fires.

    Subclasses implement :meth:`run` for their medium and may override
    :meth:`on_cancel` to tell the medium a running exchange was abandoned.
    """

    def __init__(
        self,
        asker: Asker,
        config: QuestionConfig,
        context: QuestionContext | None = None,
    ) -> None:
        self.asker = asker
        self.config = config
        self.context = context or QuestionContext()
        self.token = CancelToken()
        self._signal: LinkedCancelToken | None = None
        self._state = QuestionState.IDLE
        self._future: asyncio.Future[T] | None = None
        self._task: asyncio.Task[T] | None = None
        self._done_callbacks: list[Callable[[Question[T]], None]] = []

    # --- medium hooks ---------------------------------------------------------

    async def run(self) -> T:
        raise NotImplementedError

    def on_cancel(self, reason: Any) -> None:
        """Best-effort notification that a running exchange was cancelled."""

    # --- state ----------------------------------------------------------------

    @property
    def state(self) -> QuestionState:
        return self._state

    @property
    def signal(self) -> CancelToken:
        """The composed cancellation signal (outer OR own)."""
        if self._signal is None:
            self._signal = CancelToken.any(self.context.signal, self.token)
        return self._signal

    def done(self) -> bool:
        return self._state in (QuestionState.RESOLVED, QuestionState.REJECTED)

    def cancel(self, reason: Any = None) -> None:
        """Cancel this question. A no-op once the question has settled."""
        if self.done():
            return
        self.token.cancel(reason)

    def add_done_callback(self, callback: Callable[[Question[T]], None]) -> None:
        """Call *callback(question)* once the question settles."""
        if self.done():
            callback(self)
        else:
            self._done_callbacks.append(callback)

    def result(self) -> T:
        """Return the settled answer, or raise the settled error."""
        if self._future is None or not self._future.done():
            raise asyncio.InvalidStateError("question has not settled")
        return self._future.result()

    def to_dict(self) -> dict[str, Any]:
        """Serialize as its config only; the answer is never included."""
        return self.config.to_dict()

    # --- forcing --------------------------------------------------------------

    def start(self) -> asyncio.Future[T]:
        """Force the question and return the future holding its outcome."""
        if self._future is not None:
            return self._future
        loop = asyncio.get_running_loop()
        self._future = loop.create_future()
        self._state = QuestionState.RUNNING
        signal = self.signal
        if signal.cancelled:
            self._reject(CancellationError(signal.reason))
            return self._future
        self._task = loop.create_task(self.run())
        self._task.add_done_callback(self._on_run_done)
        signal.add_callback(self._on_signal)
        return self._future

    async def wait(self) -> T:
        future = self.start()
        try:
            return await asyncio.shield(future)
        except asyncio.CancelledError:
            if not future.done():
                self.cancel("awaiting task was cancelled")
                if future.done():
                    future.exception()
            raise

    def __await__(self) -> Generator[Any, None, T]:
        return self.wait().__await__()

    # --- settlement -----------------------------------------------------------

    def _on_signal(self, reason: Any) -> None:
        if self.done():
            return
        logger.debug("Cancelling %s question %r", self.config.type.value, self.config.title)
        self._reject(CancellationError(reason))
        try:
            self.on_cancel(reason)
        finally:
            if self._task is not None:
                self._task.cancel()

    def _on_run_done(self, task: asyncio.Task[T]) -> None:
        if self.done():
            if not task.cancelled():
                # already rejected by cancellation; mark the late outcome retrieved
                task.exception()
            return
        if task.cancelled():
            self._reject(CancellationError("run was cancelled"))
        elif task.exception() is not None:
            self._reject(task.exception())
        else:
            self._resolve(task.result())

    def _resolve(self, value: T) -> None:
        assert self._future is not None
        self._state = QuestionState.RESOLVED
        self._future.set_result(value)
        self._settled()

    def _reject(self, error: BaseException) -> None:
        assert self._future is not None
        self._state = QuestionState.REJECTED
        self._future.set_exception(error)
        self._settled()

    def _settled(self) -> None:
        if self._signal is not None:
            self._signal.detach()
        callbacks, self._done_callbacks = self._done_callbacks, []
        for cb in callbacks:
            cb(self)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(type={self.config.type.value!r}, "
            f"title={self.config.title!r}, state={self._state.value})"
        )
