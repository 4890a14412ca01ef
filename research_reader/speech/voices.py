ADAM = "pNInz6obpgDQGcFmaJgB"
BELLA = "EXAVITQu4vr4xnSDxMaL"

DEFAULT_VOICE_ID = ADAM

# Adam handles the Indian languages; Bella is the multilingual default.
VOICE_MAP: dict[str, str] = {
    "Hindi": ADAM,
    "Telugu": ADAM,
    "Spanish": BELLA,
    "French": BELLA,
    "Chinese": BELLA,
}


def voice_for(language: str) -> str:
    return VOICE_MAP.get(language, DEFAULT_VOICE_ID)
