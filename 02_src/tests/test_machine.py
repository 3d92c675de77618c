"""Tests for ConversationStateMachine."""

import asyncio
from unittest.mock import AsyncMock, Mock

import pytest

from supportnet.conversation import ConversationStateMachine
from supportnet.errors import RecommendationError
from supportnet.models import EndReason, Mood, Phase
from supportnet.policy import CheckInIntervalPolicy

DEFAULT_INTERVAL = 150 * 60


class GatedSource:
    """Interval source that blocks until released."""

    def __init__(self, answer: str = "4h"):
        self.answer = answer
        self.entered = asyncio.Event()
        self.release = asyncio.Event()

    async def request_interval(self, elapsed_days, mood):
        self.entered.set()
        await self.release.wait()
        return self.answer


def machine_with(source, clock, sobriety, timeout_ticks=1):
    return ConversationStateMachine(
        clock=clock,
        policy=CheckInIntervalPolicy(source),
        sobriety=sobriety,
        timeout_ticks=timeout_ticks,
    )


class TestInitialState:
    """Tests for the initial state."""

    @pytest.mark.asyncio
    async def test_starts_idle(self, machine, clock):
        """Test a new machine is idle with the default interval."""
        snapshot = await machine.snapshot()
        assert snapshot.phase is Phase.IDLE
        assert snapshot.history == ()
        assert snapshot.timeout_counter == 0
        assert snapshot.current_interval == DEFAULT_INTERVAL
        assert snapshot.last_contact == clock.now()
        assert snapshot.mood is None

    def test_invalid_timeout_ticks(self, clock, policy, sobriety):
        """Test a zero timeout threshold is rejected."""
        with pytest.raises(ValueError):
            ConversationStateMachine(clock, policy, sobriety, timeout_ticks=0)


class TestOnInboundMessage:
    """Tests for on_inbound_message()."""

    @pytest.mark.asyncio
    async def test_idle_to_active(self, machine, make_turn):
        """Test a message while idle opens a conversation."""
        await machine.on_inbound_message(make_turn("Hi"))

        snapshot = await machine.snapshot()
        assert snapshot.phase is Phase.ACTIVE
        assert snapshot.timeout_counter == 0
        assert len(snapshot.history) == 1
        assert snapshot.history[0].content == "Hi"

    @pytest.mark.asyncio
    async def test_second_message_resets_counter(self, clock, policy, sobriety, make_turn):
        """Test a second message keeps Active and resets the counter."""
        machine = ConversationStateMachine(clock, policy, sobriety, timeout_ticks=3)
        await machine.on_inbound_message(make_turn("First"))
        await machine.on_tick()
        assert (await machine.snapshot()).timeout_counter == 1

        await machine.on_inbound_message(make_turn("Second"))

        snapshot = await machine.snapshot()
        assert snapshot.phase is Phase.ACTIVE
        assert snapshot.timeout_counter == 0
        assert [t.content for t in snapshot.history] == ["First", "Second"]


class TestOnTick:
    """Tests for on_tick()."""

    @pytest.mark.asyncio
    async def test_idle_tick_is_noop(self, machine):
        """Test ticks while idle change nothing."""
        assert await machine.on_tick() is False
        snapshot = await machine.snapshot()
        assert snapshot.phase is Phase.IDLE
        assert snapshot.timeout_counter == 0

    @pytest.mark.asyncio
    async def test_single_tick_timeout(self, machine, make_turn):
        """Test the default threshold ends the conversation after one tick."""
        await machine.on_inbound_message(make_turn())

        assert await machine.on_tick() is True

        snapshot = await machine.snapshot()
        assert snapshot.phase is Phase.IDLE
        assert snapshot.history == ()
        assert snapshot.timeout_counter == 0

    @pytest.mark.asyncio
    async def test_multi_tick_grace_period(self, clock, policy, sobriety, make_turn):
        """Test a larger threshold counts ticks before ending."""
        machine = ConversationStateMachine(clock, policy, sobriety, timeout_ticks=3)
        await machine.on_inbound_message(make_turn())

        assert await machine.on_tick() is False
        assert await machine.on_tick() is False
        assert (await machine.snapshot()).timeout_counter == 2
        assert await machine.on_tick() is True
        assert (await machine.snapshot()).phase is Phase.IDLE


class TestStartConversation:
    """Tests for start_conversation()."""

    @pytest.mark.asyncio
    async def test_idle_to_active(self, machine, clock):
        """Test starting from idle opens a conversation and stamps contact."""
        clock.advance(hours=3)
        await machine.start_conversation()

        snapshot = await machine.snapshot()
        assert snapshot.phase is Phase.ACTIVE
        assert snapshot.timeout_counter == 0
        assert snapshot.last_contact == clock.now()

    @pytest.mark.asyncio
    async def test_active_only_resets_counter(self, clock, policy, sobriety, make_turn):
        """Test starting while active keeps history and resets the counter."""
        machine = ConversationStateMachine(clock, policy, sobriety, timeout_ticks=3)
        await machine.on_inbound_message(make_turn())
        await machine.on_tick()

        await machine.start_conversation()

        snapshot = await machine.snapshot()
        assert snapshot.phase is Phase.ACTIVE
        assert snapshot.timeout_counter == 0
        assert len(snapshot.history) == 1


class TestEndConversation:
    """Tests for end_conversation()."""

    @pytest.mark.asyncio
    async def test_resets_active_state(self, clock, policy, sobriety, make_turn):
        """Test ending clears phase, counter, history and mood."""
        machine = ConversationStateMachine(clock, policy, sobriety, timeout_ticks=5)
        await machine.on_inbound_message(make_turn())
        await machine.record_mood(Mood.GOOD)
        await machine.on_tick()
        await machine.on_tick()
        clock.advance(minutes=10)

        assert await machine.end_conversation() is True

        snapshot = await machine.snapshot()
        assert snapshot.phase is Phase.IDLE
        assert snapshot.timeout_counter == 0
        assert snapshot.history == ()
        assert snapshot.mood is None
        assert snapshot.current_interval == DEFAULT_INTERVAL
        assert snapshot.last_contact == clock.now()

    @pytest.mark.asyncio
    async def test_from_idle(self, machine):
        """Test ending while idle still leaves a clean idle state."""
        assert await machine.end_conversation() is True
        snapshot = await machine.snapshot()
        assert snapshot.phase is Phase.IDLE
        assert snapshot.history == ()
        assert snapshot.timeout_counter == 0

    @pytest.mark.asyncio
    async def test_recomputes_interval(self, clock, sobriety, mock_source, make_turn):
        """Test the recommended interval replaces the current one."""
        machine = machine_with(mock_source, clock, sobriety)
        await machine.on_inbound_message(make_turn())
        await machine.record_mood(Mood.LOW)

        await machine.end_conversation()

        assert (await machine.snapshot()).current_interval == 4 * 3600
        mock_source.request_interval.assert_awaited_once_with(11, Mood.LOW)

    @pytest.mark.asyncio
    async def test_unparsable_recommendation_keeps_previous(self, clock, sobriety, make_turn):
        """Test a malformed answer keeps the previous interval."""
        source = Mock()
        source.request_interval = AsyncMock(return_value="whenever")
        machine = machine_with(source, clock, sobriety)
        await machine.on_inbound_message(make_turn())

        assert await machine.end_conversation() is True

        snapshot = await machine.snapshot()
        assert snapshot.phase is Phase.IDLE
        assert snapshot.current_interval == DEFAULT_INTERVAL

    @pytest.mark.asyncio
    async def test_failed_recommendation_keeps_previous(self, clock, sobriety, make_turn):
        """Test a failing source keeps the last known interval."""
        source = Mock()
        source.request_interval = AsyncMock(side_effect=["5h", RecommendationError("down")])
        machine = machine_with(source, clock, sobriety)

        await machine.on_inbound_message(make_turn())
        await machine.end_conversation()
        assert (await machine.snapshot()).current_interval == 5 * 3600

        await machine.on_inbound_message(make_turn())
        await machine.end_conversation()
        assert (await machine.snapshot()).current_interval == 5 * 3600

    @pytest.mark.asyncio
    async def test_lock_released_during_recompute(self, clock, sobriety, make_turn):
        """Test state stays readable while the recommendation is pending."""
        source = GatedSource()
        machine = machine_with(source, clock, sobriety)
        await machine.on_inbound_message(make_turn())

        task = asyncio.create_task(machine.request_end_conversation())
        await source.entered.wait()

        snapshot = await asyncio.wait_for(machine.snapshot(), timeout=1)
        assert snapshot.phase is Phase.ACTIVE

        source.release.set()
        assert await task is True
        assert (await machine.snapshot()).phase is Phase.IDLE

    @pytest.mark.asyncio
    async def test_timeout_abandoned_when_user_replies(self, clock, sobriety, make_turn):
        """Test a reply during timeout handling keeps the conversation open."""
        source = GatedSource()
        machine = machine_with(source, clock, sobriety)
        await machine.on_inbound_message(make_turn("First"))

        task = asyncio.create_task(machine.on_tick())
        await source.entered.wait()
        await machine.on_inbound_message(make_turn("Still here"))
        source.release.set()

        assert await task is False
        snapshot = await machine.snapshot()
        assert snapshot.phase is Phase.ACTIVE
        assert len(snapshot.history) == 2
        assert snapshot.current_interval == DEFAULT_INTERVAL

    @pytest.mark.asyncio
    async def test_requested_end_applies_despite_reply(self, clock, sobriety, make_turn):
        """Test an explicit end is applied even if a reply arrives meanwhile."""
        source = GatedSource()
        machine = machine_with(source, clock, sobriety)
        await machine.on_inbound_message(make_turn())

        task = asyncio.create_task(machine.end_conversation(EndReason.REQUESTED))
        await source.entered.wait()
        await machine.on_inbound_message(make_turn("late"))
        source.release.set()

        assert await task is True
        snapshot = await machine.snapshot()
        assert snapshot.phase is Phase.IDLE
        assert snapshot.history == ()
        assert snapshot.current_interval == 4 * 3600


class TestIsCheckInDue:
    """Tests for is_check_in_due()."""

    @pytest.mark.asyncio
    async def test_not_due_before_interval(self, machine, clock):
        """Test nothing is due before the interval elapses."""
        clock.advance(minutes=149)
        assert await machine.is_check_in_due(clock.now()) is False

    @pytest.mark.asyncio
    async def test_due_after_interval(self, machine, clock):
        """Test a check-in is due once the interval elapsed."""
        clock.advance(minutes=150)
        assert await machine.is_check_in_due(clock.now()) is True

    @pytest.mark.asyncio
    async def test_never_due_while_active(self, machine, clock, make_turn):
        """Test an active conversation suppresses check-ins."""
        await machine.on_inbound_message(make_turn())
        clock.advance(hours=10)
        assert await machine.is_check_in_due(clock.now()) is False

    @pytest.mark.asyncio
    async def test_measured_from_conversation_end(self, machine, clock, make_turn):
        """Test the interval restarts when a conversation ends."""
        clock.advance(hours=2)
        await machine.on_inbound_message(make_turn())
        await machine.request_end_conversation()

        clock.advance(minutes=100)
        assert await machine.is_check_in_due(clock.now()) is False
        clock.advance(minutes=50)
        assert await machine.is_check_in_due(clock.now()) is True


class TestReset:
    """Tests for reset()."""

    @pytest.mark.asyncio
    async def test_reset_restores_initial_state(self, machine, make_turn):
        """Test reset drops the conversation."""
        await machine.on_inbound_message(make_turn())
        await machine.record_mood(Mood.MODERATE)

        await machine.reset()

        snapshot = await machine.snapshot()
        assert snapshot.phase is Phase.IDLE
        assert snapshot.history == ()
        assert snapshot.mood is None
