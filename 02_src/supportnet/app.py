"""Application bootstrap and lifecycle management."""

from .clock import IClock, QuietHoursGate, SobrietyClock, TimeZoneClock
from .config import SupportNetConfig
from .conversation import ConversationStateMachine, InboundHandler
from .llm import LLMIntervalSource, LLMProvider
from .logging_config import get_logger
from .models import QuietWindow, SobrietyAnchor
from .policy import CheckInIntervalPolicy, IIntervalSource
from .scheduler import CheckInScheduler
from .storage import IStorage, Storage
from .tracker import ITracker, Tracker
from .transport import ITransport, LoopbackTransport, WebhookTransport

logger = get_logger(__name__)


def build_transport(config: SupportNetConfig, clock: IClock) -> ITransport:
    """Create the transport variant named in the configuration."""
    if config.transport == "webhook":
        return WebhookTransport(config.webhook_url, clock=clock)
    return LoopbackTransport(clock=clock)


class Application:
    """Main application bootstrap."""

    def __init__(
        self,
        config: SupportNetConfig,
        transport: ITransport | None = None,
        interval_source: IIntervalSource | None = None,
        clock: IClock | None = None,
        run_scheduler: bool = True,
    ):
        self._config = config
        self._run_scheduler = run_scheduler

        # Injected collaborators take precedence over configured ones
        self._transport: ITransport | None = transport
        self._interval_source: IIntervalSource | None = interval_source
        self._clock: IClock | None = clock

        # Components (will be initialized in start())
        self._storage: IStorage | None = None
        self._tracker: ITracker | None = None
        self._sobriety: SobrietyClock | None = None
        self._policy: CheckInIntervalPolicy | None = None
        self._machine: ConversationStateMachine | None = None
        self._handler: InboundHandler | None = None
        self._scheduler: CheckInScheduler | None = None

    async def start(self) -> None:
        """Initialize components in dependency order."""
        config = self._config
        logger.info("Starting application for %s", config.user_name)

        # 1. Storage + Tracker (observability)
        self._storage = Storage(config.db_path)
        await self._storage.init()
        self._tracker = Tracker(self._storage)
        logger.info("Storage initialized")

        # 2. Clocks
        zone = config.zone
        if self._clock is None:
            self._clock = TimeZoneClock(zone)
        self._sobriety = SobrietyClock(SobrietyAnchor(config.sobriety_date, zone), self._clock)
        logger.info("Sobriety: %s", self._sobriety.elapsed().describe())

        # 3. Interval policy
        if self._interval_source is None and config.anthropic_api_key:
            llm = LLMProvider(api_key=config.anthropic_api_key, model=config.llm_model)
            self._interval_source = LLMIntervalSource(llm, config.user_name)
        if self._interval_source is None:
            logger.info("No interval recommendation source, using stage fallbacks")
        self._policy = CheckInIntervalPolicy(self._interval_source)

        # 4. Conversation state
        self._machine = ConversationStateMachine(
            clock=self._clock,
            policy=self._policy,
            sobriety=self._sobriety,
            timeout_ticks=config.timeout_ticks,
            default_interval=config.default_check_in_minutes * 60,
        )

        # 5. Transport + inbound handler
        if self._transport is None:
            self._transport = build_transport(config, self._clock)
        self._handler = InboundHandler(self._machine, config.user_id, self._tracker)
        self._transport.on_inbound_direct_message(self._handler)
        logger.info("Transport %s ready", type(self._transport).__name__)

        # 6. Scheduler
        window = QuietWindow(config.window_start, config.window_end)
        if window.start_hour == window.end_hour:
            logger.warning("Contact window %s-%s is empty, check-ins are always blocked",
                           window.start_hour, window.end_hour)
        self._scheduler = CheckInScheduler(
            clock=self._clock,
            gate=QuietHoursGate(window),
            machine=self._machine,
            transport=self._transport,
            recipient=config.user_id,
            tracker=self._tracker,
            tick_seconds=config.tick_seconds,
        )
        if self._run_scheduler and config.tick_seconds > 0:
            await self._scheduler.start()
        logger.info("All components initialized successfully")

    async def stop(self) -> None:
        """Shutdown in reverse order."""
        if self._scheduler:
            await self._scheduler.stop()
        if self._transport:
            await self._transport.close()
        if self._storage:
            await self._storage.close()
            logger.info("Storage closed")

    async def reset(self) -> None:
        """Reset conversation state and trace data."""
        was_running = bool(self._scheduler and self._scheduler.running)
        if was_running:
            await self._scheduler.stop()

        if self._storage:
            await self._storage.clear()
            logger.info("Storage cleared")

        if self._machine:
            await self._machine.reset()

        if was_running:
            await self._scheduler.start()
        logger.info("Reset complete")

    async def request_end_conversation(self) -> bool:
        """End the conversation through the tracked inbound entry point."""
        if not self._handler:
            raise RuntimeError("Application not started")
        return await self._handler.request_end()

    @property
    def config(self) -> SupportNetConfig:
        return self._config

    @property
    def storage(self) -> IStorage:
        """Get storage instance."""
        if not self._storage:
            raise RuntimeError("Application not started")
        return self._storage

    @property
    def machine(self) -> ConversationStateMachine:
        """Get conversation state machine."""
        if not self._machine:
            raise RuntimeError("Application not started")
        return self._machine

    @property
    def scheduler(self) -> CheckInScheduler:
        """Get check-in scheduler."""
        if not self._scheduler:
            raise RuntimeError("Application not started")
        return self._scheduler

    @property
    def transport(self) -> ITransport:
        """Get transport instance."""
        if not self._handler or not self._transport:
            raise RuntimeError("Application not started")
        return self._transport

    @property
    def sobriety(self) -> SobrietyClock:
        """Get sobriety clock."""
        if not self._sobriety:
            raise RuntimeError("Application not started")
        return self._sobriety
