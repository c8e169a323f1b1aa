"""Pytest configuration and fixtures."""

import os

import pytest

from scriptsync.config import ScriptSyncSettings, reset_settings, set_settings
from scriptsync.document import ScriptDocument
from scriptsync.models import Element, ElementType, Scene, Shot

SAMPLE_SCRIPT = """INT. KITCHEN - DAY
John enters.

JOHN
(whispering)
Is anyone home?

EXT. PARK - NIGHT
Leaves blow across the empty path.

MARY
Over here.

CUT TO:

INT. CAR - CONTINUOUS
Mary drives."""


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers",
        "unit: mark test as unit test",
    )
    config.addinivalue_line(
        "markers",
        "integration: mark test as integration test",
    )


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """Run every test against fresh default settings.

    Prevents SCRIPTSYNC_* variables or config files on the developer machine
    from leaking into the tests.
    """
    for key in list(os.environ):
        if key.startswith("SCRIPTSYNC_"):
            monkeypatch.delenv(key, raising=False)

    reset_settings()
    set_settings(ScriptSyncSettings(_env_file=None))

    yield

    reset_settings()


@pytest.fixture
def sample_script() -> str:
    """Three-scene screenplay with dialogue and a transition."""
    return SAMPLE_SCRIPT


@pytest.fixture
def simple_document() -> ScriptDocument:
    """Two scenes with known ids, elements and one linked shot."""
    kitchen = Scene(id="s1", sequence=1, heading="INT. KITCHEN - DAY")
    park = Scene(id="s2", sequence=2, heading="EXT. PARK - NIGHT")
    elements = [
        Element(
            id="e1",
            type=ElementType.SCENE_HEADING,
            content="INT. KITCHEN - DAY",
            scene_id="s1",
            sequence=1,
        ),
        Element(
            id="e2",
            type=ElementType.ACTION,
            content="John enters.",
            scene_id="s1",
            sequence=2,
        ),
        Element(
            id="e3",
            type=ElementType.CHARACTER,
            content="JOHN",
            scene_id="s1",
            sequence=3,
        ),
        Element(
            id="e4",
            type=ElementType.DIALOGUE,
            content="Is anyone home?",
            scene_id="s1",
            sequence=4,
        ),
        Element(
            id="e5",
            type=ElementType.SCENE_HEADING,
            content="EXT. PARK - NIGHT",
            scene_id="s2",
            sequence=5,
        ),
        Element(
            id="e6",
            type=ElementType.ACTION,
            content="Leaves blow.",
            scene_id="s2",
            sequence=6,
        ),
    ]
    shots = [Shot(id="shot1", scene_id="s1", sequence=1, linked_element_ids={"e2"})]
    return ScriptDocument(scenes=[kitchen, park], elements=elements, shots=shots)
