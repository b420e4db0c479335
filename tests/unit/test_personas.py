"""Unit tests for persona definitions."""

import pytest_check as check

from clara.agent.personas import (
    BASE_INSTRUCTION,
    PERSONA_INSTRUCTIONS,
    PERSONA_TAGLINES,
    Persona,
    build_system_instruction,
    greeting_for,
)


class TestPersonaTables:
    """Every persona has its instruction and tagline."""

    def test_every_persona_has_instruction_and_tagline(self) -> None:
        for persona in Persona:
            check.is_in(persona, PERSONA_INSTRUCTIONS)
            check.is_in(persona, PERSONA_TAGLINES)

    def test_persona_values_match_display_names(self) -> None:
        check.equal(
            [p.value for p in Persona],
            ["Relationship", "Business", "Wellness", "EDC"],
        )


class TestBuildSystemInstruction:
    """Tests for system instruction assembly."""

    def test_concatenates_base_and_persona_text(self) -> None:
        for persona in Persona:
            instruction = build_system_instruction(persona)
            check.equal(
                instruction, f"{BASE_INSTRUCTION}\n\n{PERSONA_INSTRUCTIONS[persona]}"
            )

    def test_instructions_differ_per_persona(self) -> None:
        instructions = {build_system_instruction(p) for p in Persona}
        check.equal(len(instructions), len(Persona))


def test_greeting_names_mode() -> None:
    greeting = greeting_for(Persona.WELLNESS)

    check.is_in("**Clara**", greeting)
    check.is_in("**Wellness** mode", greeting)
