"""Persistent event queue with timer-driven batch submission.

Events are written to :class:`~eventq_sdk.storage.Storage` on ``enqueue`` and
drained in batches by ``process``, either from the queue timer or on demand.
The server's response decides what happens next:

- success: nothing to do
- service unavailable: suspend processing and requeue the batch
- payment required: suspend processing, discard new events, clear the queue
- unable to authenticate: suspend processing for 15 minutes
- not found / bad request: suspend processing for 4 hours
- request entity too large: shrink the batch size and requeue, or drop the
  batch once the size is already 1
- anything else: suspend processing and requeue the batch

The engine runs on a single asyncio event loop. The processing flag is
checked and set without an intervening ``await``, so at most one drain is
in flight at a time.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List, Optional

from .config import ClientConfig
from .keys import QUEUE_PATH, build_queue_key
from .storage import Storage
from .submission import SubmissionClient, SubmissionResponse
from .suspension import SuspensionWindow
from .timer import QueueTimer

MIN_API_KEY_LENGTH = 10
AUTH_SUSPENSION_MINUTES = 15
ENDPOINT_SUSPENSION_MINUTES = 60 * 4
BATCH_SHRINK_FACTOR = 1.5


class EventQueue:
    def __init__(
        self,
        config: ClientConfig,
        storage: Storage,
        submission_client: SubmissionClient,
        *,
        window: Optional[SuspensionWindow] = None,
    ) -> None:
        self._config = config
        self._storage = storage
        self._submission_client = submission_client
        self._window = window or SuspensionWindow()
        self._processing_queue = False
        self._drain: Optional[asyncio.Future] = None
        self._timer = QueueTimer(config.processing_interval, self._on_process_queue)

    @property
    def window(self) -> SuspensionWindow:
        return self._window

    @property
    def processing(self) -> bool:
        return self._processing_queue

    @property
    def timer(self) -> QueueTimer:
        return self._timer

    def is_queue_processing_suspended(self) -> bool:
        return self._window.processing_suspended

    def are_queued_items_discarded(self) -> bool:
        return self._window.discarding

    def start(self) -> bool:
        """Start the queue timer; a no-op if it is already running."""
        return self._timer.start()

    async def stop(self) -> None:
        """Stop the queue timer.

        Waits for an in-flight drain, whether started by the timer or by a
        direct ``process()`` call, to finish before returning.
        """
        await self._timer.stop()
        drain = self._drain
        if drain is not None and not drain.done():
            await asyncio.shield(drain)

    def enqueue(self, event: Dict[str, Any]) -> None:
        self.start()

        log = self._config.log
        if self.are_queued_items_discarded():
            log.info("Queue items are currently being discarded. The event will not be queued.")
            return

        try:
            key = build_queue_key(QUEUE_PATH, self._window.clock())
            reference_id = event.get("reference_id")
            log.info(
                "Enqueuing event: %s type=%s%s",
                key,
                event.get("type"),
                f" refid={reference_id}" if reference_id else "",
            )
            self._storage.save(key, event)
        except Exception as exc:
            log.error("Unable to enqueue event: %s", exc)

    async def process(self) -> None:
        self.start()

        if self._processing_queue:
            return

        log = self._config.log
        log.info("Processing queue...")
        if not self._config.enabled:
            log.info("Configuration is disabled. The queue will not be processed.")
            return

        api_key = self._config.api_key
        if not api_key or len(api_key) < MIN_API_KEY_LENGTH:
            log.info("Invalid Api Key. The queue will not be processed.")
            return

        self._processing_queue = True
        drain = self._drain = asyncio.get_running_loop().create_future()
        events: List[Dict[str, Any]] = []
        try:
            events = self._storage.get(QUEUE_PATH, self._config.submission_batch_size)
            if not events:
                return

            log.info("Sending %d events to %s.", len(events), self._config.server_url)
            response = await self._submission_client.submit(events, self._config)
            self._process_submission_response(response, events)
            log.info("Finished processing queue.")
        except asyncio.CancelledError:
            # the batch was already dequeued; put it back before unwinding
            if events:
                log.info("Queue processing cancelled.")
                self._requeue_events(events)
            raise
        except Exception as exc:
            log.error("Error processing queue: %s", exc)
            self.suspend_processing()
        finally:
            self._processing_queue = False
            if not drain.done():
                drain.set_result(None)

    def suspend_processing(
        self,
        duration_minutes: Optional[float] = None,
        discard_future_queued_items: bool = False,
        clear_queue: bool = False,
    ) -> None:
        minutes = self._window.suspend(duration_minutes, discard=discard_future_queued_items)
        self._config.log.info("Suspending processing for %s minutes.", minutes)

        if not clear_queue:
            return

        # Over the plan limit: drop what is queued so later samples hold newer events.
        try:
            self._storage.clear(QUEUE_PATH)
        except Exception as exc:
            self._config.log.debug("Unable to clear queued events: %s", exc)

    def _process_submission_response(self, response: SubmissionResponse, events: List[Dict[str, Any]]) -> None:
        log = self._config.log
        no_submission = "The event will not be submitted."

        if response.success:
            log.info("Sent %d events.", len(events))
            return

        if response.service_unavailable:
            log.error("Server returned service unavailable.")
            self.suspend_processing()
            self._requeue_events(events)
            return

        if response.payment_required:
            log.info("Too many events have been submitted, please upgrade your plan.")
            self.suspend_processing(None, discard_future_queued_items=True, clear_queue=True)
            return

        if response.unable_to_authenticate:
            log.info("Unable to authenticate, please check your configuration. %s", no_submission)
            self.suspend_processing(AUTH_SUSPENSION_MINUTES)
            return

        if response.not_found or response.bad_request:
            log.error("Error while trying to submit data: %s", response.message)
            self.suspend_processing(ENDPOINT_SUSPENSION_MINUTES)
            return

        if response.request_entity_too_large:
            message = "Event submission discarded for being too large."
            batch_size = self._config.submission_batch_size
            if batch_size > 1:
                log.error("%s Retrying with smaller batch size.", message)
                self._config.submission_batch_size = max(1, round(batch_size / BATCH_SHRINK_FACTOR))
                self._requeue_events(events)
            else:
                log.error("%s %s", message, no_submission)
            return

        log.error("Error submitting events: %s", response.message)
        self.suspend_processing()
        self._requeue_events(events)

    def _requeue_events(self, events: List[Dict[str, Any]]) -> None:
        self._config.log.info("Requeuing %d events.", len(events))
        for event in events:
            self.enqueue(event)

    async def _on_process_queue(self) -> None:
        if not self.is_queue_processing_suspended() and not self._processing_queue:
            await self.process()


__all__ = ["EventQueue", "MIN_API_KEY_LENGTH"]
