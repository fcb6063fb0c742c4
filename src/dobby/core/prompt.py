"""System prompt assembly.

The composed instruction is the persona instruction followed by zero or
more context sections::

    <persona instruction>
    Use this current Premier League info in your responses if relevant:
    <football text>
    Use this current crypto info (...) in your responses if relevant:
    <crypto text>

The persona instruction always comes first and is never rewritten.
"""

from dataclasses import dataclass

SECTION_SEPARATOR = "\n"
CONTEXT_SECTION_TEMPLATE = "Use this current {label} in your responses if relevant:\n{text}"

PERSONA_SECTION = "persona"


@dataclass(frozen=True)
class PromptSection:
    name: str
    text: str


class PromptBuilder:
    """Accumulates named prompt sections and joins them."""

    def __init__(self, instruction: str) -> None:
        self._sections: list[PromptSection] = [PromptSection(PERSONA_SECTION, instruction)]

    @property
    def sections(self) -> list[PromptSection]:
        return list(self._sections)

    def add_context(self, name: str, label: str, text: str) -> "PromptBuilder":
        """Append a context section; empty text adds nothing."""
        if text:
            self._sections.append(
                PromptSection(name, CONTEXT_SECTION_TEMPLATE.format(label=label, text=text))
            )
        return self

    def build(self) -> str:
        return SECTION_SEPARATOR.join(section.text for section in self._sections)
