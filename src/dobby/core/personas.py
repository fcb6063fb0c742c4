"""Persona registry: persona id -> fixed system instruction."""

from collections.abc import Iterable

from dobby.configs.persona import DEFAULT_PERSONA, PersonaConfig


class PersonaRegistry:
    """Immutable lookup table built once from configuration.

    Unknown ids resolve to ``default`` (a generic helpful assistant with
    no context sources); lookups never raise.
    """

    def __init__(
        self,
        personas: Iterable[PersonaConfig],
        default: PersonaConfig = DEFAULT_PERSONA,
    ) -> None:
        self._personas = {persona.id: persona for persona in personas}
        self._default = default

    @property
    def ids(self) -> list[str]:
        return list(self._personas)

    def __contains__(self, persona_id: object) -> bool:
        return persona_id in self._personas

    def lookup(self, persona_id: str) -> PersonaConfig:
        return self._personas.get(persona_id, self._default)

    def instruction(self, persona_id: str) -> str:
        return self.lookup(persona_id).system_instruction
