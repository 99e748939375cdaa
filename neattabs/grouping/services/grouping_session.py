from concurrent.futures import Future
from typing import Optional

from neattabs.coloring.interfaces.color_allocator import ColorAllocator
from neattabs.coloring.services.color_allocator import RotatingColorAllocator
from neattabs.grouping.domain.grouping_intent import GroupingIntent, NoOpReason
from neattabs.grouping.domain.grouping_outcome import GroupingOutcome
from neattabs.grouping.domain.page_event import PageEvent
from neattabs.grouping.interfaces.grouping_engine import GroupingEngine
from neattabs.grouping.runtime.window_task_queue import WindowTaskQueue
from neattabs.grouping.services.grouping_decision_engine import GroupingDecisionEngine
from neattabs.grouping.services.intent_dispatcher import IntentDispatcher
from neattabs.host.interfaces.browser_host import BrowserHost
from neattabs.infrastructure.logging.structured_runtime_logger import StructuredRuntimeLogger
from neattabs.preferences.services.preferences_cache import GroupingPreferencesCache


class GroupingSession:
    """
    Long-lived owner of the grouping runtime for one browser.

    Owns the per-window task queue, the color rotation state (through the
    allocator) and the cached preferences. Page events for the same window are
    decided and dispatched one at a time. Every event ends in a GroupingOutcome;
    failures are logged and absorbed at the event boundary.
    """

    def __init__(
        self,
        host: BrowserHost,
        preferences: GroupingPreferencesCache,
        allocator: Optional[ColorAllocator] = None,
        engine: Optional[GroupingEngine] = None,
        dispatcher: Optional[IntentDispatcher] = None,
        queue: Optional[WindowTaskQueue] = None,
        logger: Optional[StructuredRuntimeLogger] = None,
    ):
        self.host = host
        self.preferences = preferences
        self.allocator = allocator or RotatingColorAllocator()
        self.engine = engine or GroupingDecisionEngine(host, self.allocator, preferences)
        self.dispatcher = dispatcher or IntentDispatcher(host)
        self.queue = queue or WindowTaskQueue()
        self.logger = logger or StructuredRuntimeLogger()

    def submit(self, event: PageEvent) -> "Future[GroupingOutcome]":
        return self.queue.submit(event.window_id, lambda: self.process(event))

    def process(self, event: PageEvent) -> GroupingOutcome:
        try:
            intent = self.engine.on_page_event(event)
        except Exception as e:
            self.logger.warning(
                "GROUPING_EVENT_DROPPED",
                page_id=event.page_id,
                window_id=event.window_id,
                error=str(e),
            )
            return GroupingOutcome(event=event, intent=GroupingIntent.no_op(event.window_id, NoOpReason.DROPPED))

        self.logger.emit(
            "GROUPING_DECIDED",
            page_id=event.page_id,
            window_id=event.window_id,
            kind=event.kind.value,
            **{k: v for k, v in intent.to_payload().items() if k != "window_id"},
        )
        if intent.is_noop:
            return GroupingOutcome(event=event, intent=intent)

        result = self.dispatcher.dispatch(intent)
        if not result.ok:
            self.logger.warning(
                "GROUPING_DISPATCH_FAILED",
                page_id=event.page_id,
                window_id=event.window_id,
                action=intent.action.value,
                failure_type=result.failure_type.value,
                reason=result.reason,
            )
        return GroupingOutcome(event=event, intent=intent, result=result)

    def on_window_closed(self, window_id: int) -> int:
        """Cancel queued events of the window and evict its color state once in-flight work ends."""
        cancelled = self.queue.cancel_window(window_id)

        def evict() -> None:
            self.allocator.evict(window_id)
            self.logger.emit("WINDOW_EVICTED", window_id=window_id, cancelled_events=cancelled)

        # Queued behind a running decision, which could otherwise re-create the state
        self.queue.submit(window_id, evict)
        return cancelled

    def close(self) -> None:
        self.queue.shutdown()
