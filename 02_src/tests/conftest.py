"""Pytest configuration and fixtures."""

import sys
from datetime import datetime, timedelta
from pathlib import Path
from unittest.mock import AsyncMock, Mock
from zoneinfo import ZoneInfo

import pytest
import pytest_asyncio

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

CHICAGO = ZoneInfo("America/Chicago")
TRACKED_USER = "user-1"


class FakeClock:
    """Manually advanced clock."""

    def __init__(self, start: datetime):
        self._now = start

    def now(self) -> datetime:
        return self._now

    def set(self, value: datetime) -> None:
        self._now = value

    def advance(self, **kwargs) -> None:
        self._now = self._now + timedelta(**kwargs)


@pytest.fixture
def clock():
    """Clock frozen at 2023-04-17 13:00 Chicago time."""
    return FakeClock(datetime(2023, 4, 17, 13, 0, tzinfo=CHICAGO))


@pytest.fixture
def anchor():
    """Sobriety anchor eleven days before the clock fixture."""
    from supportnet.models import SobrietyAnchor

    return SobrietyAnchor(epoch=datetime(2023, 4, 6, 0, 0, tzinfo=CHICAGO), timezone=CHICAGO)


@pytest.fixture
def sobriety(anchor, clock):
    from supportnet.clock import SobrietyClock

    return SobrietyClock(anchor, clock)


@pytest.fixture
def mock_source():
    """Interval source answering '4h'."""
    source = Mock()
    source.request_interval = AsyncMock(return_value="4h")
    return source


@pytest.fixture
def policy():
    """Policy without a recommendation source."""
    from supportnet.policy import CheckInIntervalPolicy

    return CheckInIntervalPolicy()


@pytest.fixture
def machine(clock, policy, sobriety):
    """State machine with a single-tick timeout."""
    from supportnet.conversation import ConversationStateMachine

    return ConversationStateMachine(
        clock=clock,
        policy=policy,
        sobriety=sobriety,
        timeout_ticks=1,
    )


@pytest.fixture
def make_turn(clock):
    """Factory for user ChatTurns stamped with the fake clock."""
    from supportnet.models import ChatTurn

    def _make(content: str = "Hello", role: str = "user") -> ChatTurn:
        return ChatTurn(role=role, content=content, timestamp=clock.now())

    return _make


@pytest.fixture
def mock_tracker():
    tracker = Mock()
    tracker.track = AsyncMock()
    return tracker


@pytest.fixture
def transport(clock):
    from supportnet.transport import LoopbackTransport

    return LoopbackTransport(clock=clock)


@pytest.fixture
def scheduler(clock, machine, transport, mock_tracker):
    """Scheduler with a 09:00-21:00 contact window."""
    from supportnet.clock import QuietHoursGate
    from supportnet.models import QuietWindow
    from supportnet.scheduler import CheckInScheduler

    return CheckInScheduler(
        clock=clock,
        gate=QuietHoursGate(QuietWindow(9, 21)),
        machine=machine,
        transport=transport,
        recipient=TRACKED_USER,
        tracker=mock_tracker,
        tick_seconds=60,
    )


@pytest_asyncio.fixture
async def storage():
    """Create in-memory storage for testing."""
    from supportnet.storage import Storage

    st = Storage(":memory:")
    await st.init()
    yield st
    await st.close()


@pytest.fixture
def tracker(storage):
    """Create Tracker with storage."""
    from supportnet.tracker import Tracker

    return Tracker(storage=storage)


@pytest.fixture
def config():
    """Minimal configuration for the tracked user."""
    from supportnet.config import SupportNetConfig

    return SupportNetConfig(
        user_id=TRACKED_USER,
        user_name="Alex",
        timezone="America/Chicago",
        sobriety_date=datetime(2023, 4, 6, 0, 0, tzinfo=CHICAGO),
        db_path=":memory:",
    )
