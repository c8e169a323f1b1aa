"""Turn classified lines into sequenced scenes and elements."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from scriptsync.config import ScriptSyncSettings, get_logger, get_settings
from scriptsync.models import Element, ElementType, ParseResult, Scene
from scriptsync.parser.classifier import ClassificationContext, LineClassifier

logger = get_logger(__name__)

_DIALOGUE_BLOCK_MEMBERS = frozenset(
    {ElementType.PARENTHETICAL, ElementType.DIALOGUE}
)


class ScreenplayParser:
    """Parse screenplay text into scenes and globally sequenced elements."""

    def __init__(self, settings: ScriptSyncSettings | None = None) -> None:
        """Initialize the parser.

        Args:
            settings: Configuration settings (uses global settings if omitted)
        """
        self.settings = settings or get_settings()
        self.classifier = LineClassifier(self.settings)

    def parse(self, text: str) -> ParseResult:
        """Parse a screenplay text blob.

        Args:
            text: Screenplay text; any string is accepted

        Returns:
            Parsed scenes and elements. Blank lines produce no element.
        """
        return self.parse_lines(text.splitlines())

    def parse_lines(self, lines: Iterable[str]) -> ParseResult:
        """Parse an iterable of lines.

        Args:
            lines: Lines without their line terminators

        Returns:
            Parsed scenes and elements
        """
        elements: list[Element] = []
        scenes: list[Scene] = []
        current_scene: Scene | None = None
        context = ClassificationContext()

        for line in lines:
            if not line.strip():
                context = ClassificationContext(
                    previous_type=context.previous_type,
                    after_blank=True,
                )
                continue

            element_type = self.classifier.classify(line, context)
            content = self.classifier.normalize(line, element_type)

            if element_type is ElementType.SCENE_HEADING:
                current_scene = Scene(sequence=len(scenes) + 1, heading=content)
                scenes.append(current_scene)
            elif current_scene is None:
                # Content before the first heading gets a preamble scene
                current_scene = Scene(
                    sequence=len(scenes) + 1,
                    heading=self.settings.preamble_heading,
                )
                scenes.append(current_scene)

            elements.append(
                Element(
                    type=element_type,
                    content=content,
                    scene_id=current_scene.id,
                    sequence=len(elements) + 1,
                )
            )
            context = ClassificationContext(
                previous_type=element_type,
                after_blank=False,
            )

        logger.debug(
            "Parsed screenplay text",
            scenes=len(scenes),
            elements=len(elements),
        )
        return ParseResult(elements=elements, scenes=scenes)


@dataclass
class ElementGroup:
    """A run of elements that link UIs treat as one selectable unit."""

    elements: list[Element] = field(default_factory=list)

    @property
    def lead(self) -> Element:
        """First element of the group."""
        return self.elements[0]

    @property
    def element_ids(self) -> list[str]:
        """Ids of the grouped elements, in order."""
        return [el.id for el in self.elements]

    @property
    def is_dialogue_block(self) -> bool:
        """Whether the group is a character cue with its speech."""
        return self.lead.type is ElementType.CHARACTER


def group_elements(elements: list[Element]) -> list[ElementGroup]:
    """Group character cues with the parentheticals and dialogue that follow.

    A character element and the run of parenthetical/dialogue elements
    directly after it form one group; every other element is a group of
    its own. Stray dialogue that does not follow a cue is also a singleton.

    Args:
        elements: Elements in script order

    Returns:
        Groups in script order, covering every element exactly once
    """
    groups: list[ElementGroup] = []
    index = 0
    count = len(elements)

    while index < count:
        element = elements[index]
        end = index + 1
        if element.type is ElementType.CHARACTER:
            while end < count and elements[end].type in _DIALOGUE_BLOCK_MEMBERS:
                end += 1
        groups.append(ElementGroup(elements=list(elements[index:end])))
        index = end

    return groups
