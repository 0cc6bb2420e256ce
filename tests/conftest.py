import pytest

from maskedit.core.engine import MaskEngine
from maskedit.core.event_bus import EventBus
from maskedit.handlers.edit_controller import EditController

PHONE_MASK = "(000) 000-0000"


@pytest.fixture
def phone_engine():
    """Empty engine for a US phone number mask."""
    return MaskEngine(PHONE_MASK, "_")


@pytest.fixture
def event_bus():
    return EventBus()


@pytest.fixture
def make_controller(event_bus):
    """Factory for controllers wired to the shared test bus."""

    def _make(mask: str = "", **kwargs) -> EditController:
        kwargs.setdefault("event_bus", event_bus)
        return EditController(mask=mask, **kwargs)

    return _make
