from __future__ import annotations

from typing import Any, Dict, List

ASSISTANT_NAME = "Cheffy"
DEFAULT_LANGUAGE = "English"

SEED_USER_MESSAGE = "Hello"
SEED_ASSISTANT_MESSAGE = (
    f"Welcome! I am {ASSISTANT_NAME}. My job is to provide you with any recipe "
    "that you want. What are you in the mood for?"
)

# Sampling parameters sent with every completion request
TEMPERATURE = 0.7
FREQUENCY_PENALTY = 0
PRESENCE_PENALTY = 0
MAX_TOKENS = 1000
COMPLETIONS = 1


def system_prompt(language: str) -> str:
    return f"""
You are a bot called {ASSISTANT_NAME} that gives users any recipe they want in their language.
If the user asks a question for anything other than a recipe, tell them that you can only assist them with food recipes only.
Give the user step by step instructions on how to make the meal.
Respond with the users language in {language}.
If the user asks for any recipe, give your response in this JSON format only, and respond with absolutely nothing else:
{{
recipeTitle: recipe title translated to {language},
recipeDescription: recipe description translated to {language},
ingredients: ingredients translated to {language},
instructions: instructions translated to {language}
}}
""".strip()


def build_messages(prompt: str, language: str | None = None) -> List[Dict[str, str]]:
    language = (language or "").strip() or DEFAULT_LANGUAGE
    return [
        {"role": "system", "content": system_prompt(language)},
        {"role": "user", "content": SEED_USER_MESSAGE},
        {"role": "assistant", "content": SEED_ASSISTANT_MESSAGE},
        {"role": "user", "content": prompt},
    ]


def build_completion_envelope(prompt: str, language: str | None, model: str) -> Dict[str, Any]:
    """
    Full request body for the chat completions endpoint: the role-tagged
    turns plus fixed sampling parameters.
    """
    if not prompt or not prompt.strip():
        raise ValueError("Prompt cannot be empty.")

    return {
        "model": model,
        "messages": build_messages(prompt, language),
        "temperature": TEMPERATURE,
        "frequency_penalty": FREQUENCY_PENALTY,
        "presence_penalty": PRESENCE_PENALTY,
        "max_tokens": MAX_TOKENS,
        "n": COMPLETIONS,
    }
