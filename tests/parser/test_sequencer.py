"""Tests for turning screenplay text into scenes and elements."""

import pytest

from scriptsync.config import ScriptSyncSettings
from scriptsync.models import ElementType, SyncStatus
from scriptsync.parser import ScreenplayParser, group_elements


@pytest.fixture
def parser() -> ScreenplayParser:
    """Create parser with default settings."""
    return ScreenplayParser()


class TestScreenplayParser:
    """Parse text into sequenced scenes and elements."""

    def test_kitchen_scene(self, parser: ScreenplayParser) -> None:
        """Test the canonical single-scene example."""
        text = (
            "INT. KITCHEN - DAY\nJohn enters.\n\nJOHN\n(whispering)\nIs anyone home?"
        )
        result = parser.parse(text)

        assert [(el.type, el.content) for el in result.elements] == [
            (ElementType.SCENE_HEADING, "INT. KITCHEN - DAY"),
            (ElementType.ACTION, "John enters."),
            (ElementType.CHARACTER, "JOHN"),
            (ElementType.PARENTHETICAL, "(whispering)"),
            (ElementType.DIALOGUE, "Is anyone home?"),
        ]
        assert len(result.scenes) == 1
        assert result.scenes[0].heading == "INT. KITCHEN - DAY"
        assert result.scenes[0].sequence == 1
        assert {el.scene_id for el in result.elements} == {result.scenes[0].id}

    def test_empty_text(self, parser: ScreenplayParser) -> None:
        """Test empty input produces nothing."""
        result = parser.parse("")
        assert result.elements == []
        assert result.scenes == []

    def test_whitespace_only_text(self, parser: ScreenplayParser) -> None:
        """Test blank lines produce no elements."""
        result = parser.parse("\n   \n\t\n")
        assert result.elements == []
        assert result.scenes == []

    def test_multiple_scenes(self, parser: ScreenplayParser, sample_script) -> None:
        """Test scene boundaries and global element sequencing."""
        result = parser.parse(sample_script)

        assert [scene.heading for scene in result.scenes] == [
            "INT. KITCHEN - DAY",
            "EXT. PARK - NIGHT",
            "INT. CAR - CONTINUOUS",
        ]
        assert [scene.sequence for scene in result.scenes] == [1, 2, 3]
        assert [el.sequence for el in result.elements] == list(
            range(1, len(result.elements) + 1)
        )
        assert len(result.elements) == 12

        park = result.scenes[1]
        assert [el.type for el in result.elements_for(park.id)] == [
            ElementType.SCENE_HEADING,
            ElementType.ACTION,
            ElementType.CHARACTER,
            ElementType.DIALOGUE,
            ElementType.TRANSITION,
        ]

    def test_new_scenes_are_pending(self, parser: ScreenplayParser) -> None:
        """Test freshly parsed scenes have no planning partner yet."""
        result = parser.parse("INT. A - DAY\n\nEXT. B - NIGHT")
        assert {scene.sync_status for scene in result.scenes} == {SyncStatus.PENDING}

    def test_content_before_first_heading(self, parser: ScreenplayParser) -> None:
        """Test leading content is collected in a preamble scene."""
        result = parser.parse("FADE IN:\n\nINT. ROOM - DAY\nA chair.")

        assert len(result.scenes) == 2
        preamble, room = result.scenes
        assert preamble.heading == "UNNAMED SCENE"
        assert preamble.sequence == 1
        assert room.sequence == 2

        first = result.elements[0]
        assert first.type is ElementType.TRANSITION
        assert first.scene_id == preamble.id
        assert result.scene_for(first) == preamble

    def test_preamble_heading_setting(self) -> None:
        """Test the preamble heading comes from settings."""
        settings = ScriptSyncSettings(_env_file=None, preamble_heading="cold open")
        result = ScreenplayParser(settings).parse("Rain falls.")
        assert result.scenes[0].heading == "COLD OPEN"

    def test_windows_line_endings(self, parser: ScreenplayParser) -> None:
        """Test CRLF text parses like LF text."""
        unix = parser.parse("INT. A - DAY\nJohn waits.\n\nJOHN\nHi.")
        windows = parser.parse("INT. A - DAY\r\nJohn waits.\r\n\r\nJOHN\r\nHi.")
        assert [(el.type, el.content) for el in unix.elements] == [
            (el.type, el.content) for el in windows.elements
        ]

    def test_parse_lines(self, parser: ScreenplayParser) -> None:
        """Test parsing an iterable of lines."""
        result = parser.parse_lines(iter(["EXT. PARK - DAY", "Birds sing."]))
        assert [el.type for el in result.elements] == [
            ElementType.SCENE_HEADING,
            ElementType.ACTION,
        ]

    def test_ids_are_unique(self, parser: ScreenplayParser, sample_script) -> None:
        """Test every element and scene gets its own id."""
        result = parser.parse(sample_script)
        element_ids = [el.id for el in result.elements]
        scene_ids = [scene.id for scene in result.scenes]
        assert len(set(element_ids)) == len(element_ids)
        assert len(set(scene_ids)) == len(scene_ids)

    def test_json_field_names(self, parser: ScreenplayParser) -> None:
        """Test serialized output uses the stable camelCase names."""
        result = parser.parse("INT. A - DAY\nJohn waits.")
        data = result.to_dict()

        assert set(data["elements"][0]) == {
            "id",
            "type",
            "content",
            "sceneId",
            "sequence",
        }
        scene = data["scenes"][0]
        assert scene["syncStatus"] == "pending"
        assert scene["locationId"] is None
        assert data["elements"][0]["type"] == "scene_heading"


class TestGroupElements:
    """Grouping of cues with their speech."""

    def test_dialogue_block(self, parser: ScreenplayParser) -> None:
        """Test a cue, parenthetical and dialogue form one group."""
        result = parser.parse(
            "INT. KITCHEN - DAY\nJohn enters.\n\nJOHN\n(whispering)\nIs anyone home?"
        )
        groups = group_elements(result.elements)

        assert [len(group.elements) for group in groups] == [1, 1, 3]
        block = groups[2]
        assert block.is_dialogue_block
        assert block.lead.content == "JOHN"
        assert block.element_ids == [el.id for el in result.elements[2:]]

    def test_groups_cover_every_element(self, parser: ScreenplayParser, sample_script):
        """Test groups partition the element list in order."""
        result = parser.parse(sample_script)
        groups = group_elements(result.elements)
        flattened = [el for group in groups for el in group.elements]
        assert flattened == result.elements

    def test_stray_dialogue_is_singleton(self, parser: ScreenplayParser) -> None:
        """Test speech without a cue is not pulled into a block."""
        elements = parser.parse("INT. A - DAY\nJohn waits.").elements
        stray = elements[1].model_copy(update={"type": ElementType.DIALOGUE})
        groups = group_elements([elements[0], stray])
        assert len(groups) == 2
        assert not groups[1].is_dialogue_block

    def test_empty(self) -> None:
        """Test grouping nothing yields nothing."""
        assert group_elements([]) == []
