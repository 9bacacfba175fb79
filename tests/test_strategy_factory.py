from datetime import date

import pytest

from src.ojt_tracker.ojt_tracker.core.enums import ScanEvent, Session, Slot
from src.ojt_tracker.ojt_tracker.core.exceptions import ConflictError, ValidationError
from src.ojt_tracker.ojt_tracker.dtr.duration import parse_hms
from src.ojt_tracker.ojt_tracker.dtr.factory import ScanStrategyFactory
from src.ojt_tracker.ojt_tracker.dtr.model import DTREntry
from src.ojt_tracker.ojt_tracker.dtr.strategies.auto_strategy import AutoDetectStrategy
from src.ojt_tracker.ojt_tracker.dtr.strategies.base import open_session
from src.ojt_tracker.ojt_tracker.dtr.strategies.event_strategy import EventStrategy, FixedSlotStrategy


def _entry(**slots) -> DTREntry:
    return DTREntry(entry_id=1, intern_id=1, user_id=1, supervisor_id=1, work_date=date(2026, 3, 2), **slots)


def test_factory_picks_strategy_by_arguments():
    factory = ScanStrategyFactory()

    assert isinstance(factory.for_scan(), AutoDetectStrategy)
    assert isinstance(factory.for_scan(event=ScanEvent.TIME_IN), EventStrategy)
    assert isinstance(factory.for_scan(slot=Slot.TIME_OUT_PM), FixedSlotStrategy)


def test_session_split_is_exclusive():
    factory = ScanStrategyFactory()

    assert factory.session_for(parse_hms("11:59:59")) == Session.AM
    assert factory.session_for(parse_hms("12:00:00")) == Session.PM


def test_factory_rejects_bad_split():
    with pytest.raises(ValidationError):
        ScanStrategyFactory(am_pm_split="noon")


def test_auto_detect_prefers_time_in_then_time_out():
    strategy = AutoDetectStrategy()

    assert strategy.decide(entry=None, session=Session.AM).slot == Slot.TIME_IN_AM
    decision = strategy.decide(entry=_entry(time_in_am=28800), session=Session.AM)
    assert decision.slot == Slot.TIME_OUT_AM
    assert decision.is_time_out


def test_auto_detect_conflicts_when_session_complete():
    with pytest.raises(ConflictError):
        AutoDetectStrategy().decide(entry=_entry(time_in_pm=46800, time_out_pm=61200), session=Session.PM)


def test_time_out_closes_open_am_session_whatever_the_clock():
    entry = _entry(time_in_am=28800)

    assert AutoDetectStrategy().decide(entry=entry, session=Session.PM).slot == Slot.TIME_OUT_AM
    assert EventStrategy(ScanEvent.TIME_OUT).decide(entry=entry, session=Session.PM).slot == Slot.TIME_OUT_AM
    assert EventStrategy(ScanEvent.TIME_IN).decide(entry=entry, session=Session.PM).slot == Slot.TIME_IN_PM


def test_open_session():
    assert open_session(None) is None
    assert open_session(_entry(time_in_am=28800)) == Session.AM
    assert open_session(_entry(time_in_am=28800, time_in_pm=46800)) == Session.PM
    assert open_session(_entry(time_in_am=28800, time_out_am=43200)) is None
