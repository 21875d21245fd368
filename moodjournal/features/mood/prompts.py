"""
LLM Prompts for mood analysis.
Centralized prompt templates and generation configs for both model calls.
"""

from typing import Any, Dict, Iterable

from moodjournal.shared.constants import EMOTION_LABELS, SENTIMENTS, WORD_TO_EMOTION


EXTRACTION_SYSTEM_INSTRUCTION = """Act as a professional mood and sentiment analysis AI. Your task is to analyze text and provide a structured JSON response.
The JSON object MUST contain the following fields:
- "sentiment": a string, one of "positive", "negative", or "neutral".
- "score": a number between -1 and 1, representing the sentiment score.
- "emotions": an array of strings listing the primary emotions detected (e.g., "joy", "sadness", "anger", "anxiety").
- "triggers": an array of objects, where each object has "name" (the trigger/entity) and "type" (e.g., "PERSON", "EVENT", "WORK_OF_ART") derived from the text.

Example of expected JSON output:
{
  "sentiment": "positive",
  "score": 0.8,
  "emotions": ["excitement", "joy"],
  "triggers": [
    {"name": "the presentation", "type": "EVENT"},
    {"name": "my team", "type": "PERSON"}
  ]
}"""


EXTRACTION_RESPONSE_SCHEMA: Dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "sentiment": {"type": "STRING", "enum": list(SENTIMENTS)},
        "score": {"type": "NUMBER"},
        "emotions": {
            "type": "ARRAY",
            "items": {"type": "STRING"},
        },
        "triggers": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "name": {"type": "STRING"},
                    "type": {"type": "STRING"},
                },
            },
        },
    },
}

EXTRACTION_GENERATION_CONFIG: Dict[str, Any] = {
    "responseMimeType": "application/json",
    "responseSchema": EXTRACTION_RESPONSE_SCHEMA,
}


SUPPORT_SYSTEM_INSTRUCTION = "You are a compassionate AI assistant for mental well-being."

SUPPORT_GENERATION_CONFIG: Dict[str, Any] = {
    "temperature": 0.7,
    "maxOutputTokens": 200,
}


def _quoted(words: Iterable[str]) -> str:
    return ", ".join(f'"{word}"' for word in words)


def build_extraction_prompt(text: str) -> str:
    """Build the user prompt for sentiment/emotion/trigger extraction."""
    mapping_hints = ", ".join(f'"{word}" → "{label}"' for word, label in WORD_TO_EMOTION.items())

    return f"""
Analyze the following journal entry for sentiment, emotions, and triggers.

Journal Entry: "{text}"

Instructions:
1. Determine the overall sentiment: {_quoted(SENTIMENTS)}.
2. Identify primary emotions **directly expressed in the text**. Use only these labels:
   {_quoted(EMOTION_LABELS)}.
   Map words in the text like {mapping_hints}.
   The array must contain all detected emotions; do not leave it empty.
3. Identify triggers (people, events, objects) from the text.
4. Return a JSON object exactly like this:

{{
  "sentiment": "negative",
  "score": -0.7,
  "emotions": ["anger", "frustration"],
  "triggers": [
    {{"name": "my coworker", "type": "PERSON"}},
    {{"name": "the meeting", "type": "EVENT"}}
  ]
}}
"""


def build_support_prompt(
    text: str,
    sentiment: str,
    emotions: Iterable[str],
    trigger_names: Iterable[str],
) -> str:
    """Build the user prompt for the supportive message."""
    return f"""
You are a friendly AI assistant helping someone process their journal entry.
Their journal entry is: "{text}"
Analysis of the journal:
  Sentiment: {sentiment}
  Emotions: {", ".join(emotions)}
  Triggers: {", ".join(trigger_names)}

Based on this, provide a short, warm, and situation-specific supportive message
that encourages the user to reflect or cope with their feelings. Keep it under 50 words.
"""
