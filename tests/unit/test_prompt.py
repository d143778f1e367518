from __future__ import annotations

import pytest

from src.services.prompt import (
    SEED_ASSISTANT_MESSAGE,
    SEED_USER_MESSAGE,
    build_completion_envelope,
    build_messages,
)


class TestBuildMessages:
    def test_turn_order(self) -> None:
        messages = build_messages("Pad thai please", "Spanish")

        assert [m["role"] for m in messages] == ["system", "user", "assistant", "user"]
        assert messages[1]["content"] == SEED_USER_MESSAGE
        assert messages[2]["content"] == SEED_ASSISTANT_MESSAGE
        assert messages[3]["content"] == "Pad thai please"

    def test_system_prompt_uses_language(self) -> None:
        system = build_messages("Pad thai", "Japanese")[0]["content"]

        assert "Respond with the users language in Japanese." in system
        assert "recipeTitle: recipe title translated to Japanese" in system

    def test_language_defaults_to_english(self) -> None:
        system = build_messages("Pad thai", None)[0]["content"]

        assert "in English." in system


class TestBuildCompletionEnvelope:
    def test_sampling_parameters(self) -> None:
        envelope = build_completion_envelope("Ramen", "English", "gpt-3.5-turbo-0613")

        assert envelope["model"] == "gpt-3.5-turbo-0613"
        assert envelope["temperature"] == 0.7
        assert envelope["frequency_penalty"] == 0
        assert envelope["presence_penalty"] == 0
        assert envelope["max_tokens"] == 1000
        assert envelope["n"] == 1
        assert len(envelope["messages"]) == 4

    def test_rejects_blank_prompt(self) -> None:
        with pytest.raises(ValueError):
            build_completion_envelope("   ", "English", "gpt-3.5-turbo-0613")
