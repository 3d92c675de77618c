"""CheckInScheduler implementation."""

import asyncio
from enum import Enum

from ..clock import IClock, QuietHoursGate
from ..conversation import ConversationStateMachine
from ..errors import TransportError
from ..logging_config import get_logger
from ..models import Phase
from ..tracker import ITracker
from ..transport import ITransport

logger = get_logger(__name__)


class TickOutcome(str, Enum):
    """Result of a single scheduler tick."""

    QUIET_HOURS = "quiet_hours"
    WAITING = "waiting"
    TIMED_OUT = "timed_out"
    CHECK_IN_SENT = "check_in_sent"
    SEND_FAILED = "send_failed"


class CheckInScheduler:
    """Per-tick driver deciding when to check in with the tracked user."""

    def __init__(
        self,
        clock: IClock,
        gate: QuietHoursGate,
        machine: ConversationStateMachine,
        transport: ITransport,
        recipient: str,
        tracker: ITracker | None = None,
        tick_seconds: float = 60,
    ):
        self._clock = clock
        self._gate = gate
        self._machine = machine
        self._transport = transport
        self._recipient = recipient
        self._tracker = tracker
        self._tick_seconds = tick_seconds
        self._task: asyncio.Task | None = None
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    async def tick(self) -> TickOutcome:
        """Run one scheduling step."""
        now = self._clock.now()

        if self._gate.is_blocked(now):
            logger.debug(
                "Quiet hours, deferring check-ins for %s",
                self._gate.time_until_permitted(now),
                extra={"context": {"outcome": TickOutcome.QUIET_HOURS.value}},
            )
            return TickOutcome.QUIET_HOURS

        if await self._machine.on_tick():
            logger.info(
                "Conversation timed out",
                extra={
                    "context": {
                        "outcome": TickOutcome.TIMED_OUT.value,
                        "phase": Phase.IDLE.value,
                    }
                },
            )
            await self._track("conversation_timed_out", {})
            return TickOutcome.TIMED_OUT

        if not await self._machine.is_check_in_due(now):
            return TickOutcome.WAITING

        try:
            await self._transport.send_check_in_prompt(self._recipient)
        except TransportError as e:
            logger.error(
                "Check-in send failed, retrying next tick: %s",
                e,
                extra={"context": {"outcome": TickOutcome.SEND_FAILED.value}},
            )
            await self._track("check_in_failed", {"error": str(e)})
            return TickOutcome.SEND_FAILED

        await self._machine.start_conversation()
        local_time = now.strftime("%H:%M:%S")
        logger.info(
            "Check-in sent to %s",
            self._recipient,
            extra={
                "context": {
                    "outcome": TickOutcome.CHECK_IN_SENT.value,
                    "local_time": local_time,
                }
            },
        )
        await self._track("check_in_sent", {"local_time": local_time})
        return TickOutcome.CHECK_IN_SENT

    async def start(self) -> None:
        """Start ticking in the background."""
        if self._running:
            return
        self._running = True
        self._task = asyncio.create_task(self._run())
        logger.info("Scheduler started, ticking every %ss", self._tick_seconds)

    async def stop(self) -> None:
        """Stop the background ticker."""
        self._running = False
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        logger.info("Scheduler stopped")

    async def _run(self) -> None:
        while self._running:
            try:
                await asyncio.sleep(self._tick_seconds)
                outcome = await self.tick()
                logger.debug("Tick outcome: %s", outcome.value)
            except asyncio.CancelledError:
                break
            except Exception as e:
                logger.error("Scheduler tick error: %s", e, exc_info=True)

    async def _track(self, event_type: str, data: dict) -> None:
        if self._tracker:
            await self._tracker.track(event_type=event_type, actor="scheduler", data=data)
