"""
Shared constants for mood analysis.

The vocabulary tables here are the single source of truth for the prompt
builders and the normalizer.
"""

# Closed sentiment enum
SENTIMENTS = ("positive", "neutral", "negative")

# Emotion labels the extraction prompt asks the model to use
EMOTION_LABELS = (
    "joy",
    "excitement",
    "hope",
    "sadness",
    "anger",
    "stress",
    "anxiety",
    "frustration",
    "calmness",
)

# Literal words the model sometimes echoes from the text -> canonical label
WORD_TO_EMOTION = {
    "frustrated": "frustration",
    "ignored": "anger",
    "upset": "anger",
    "sad": "sadness",
    "happy": "joy",
    "stressed": "stress",
}

# Used when the model returns no emotions at all
DEFAULT_EMOTION_BY_SENTIMENT = {
    "positive": "contentment",
    "negative": "frustration",
}
DEFAULT_EMOTION = "calmness"

UNSPECIFIED_TRIGGER = {"name": "unspecified", "type": "UNSPECIFIED"}
DEFAULT_TRIGGER_TYPE = "OTHER"

# Magnitude is derived from the score: abs(score) * MAGNITUDE_SCALE
MAGNITUDE_SCALE = 2.5

FALLBACK_SUPPORT_MESSAGE = "Keep going, you're doing great! 🌟"
