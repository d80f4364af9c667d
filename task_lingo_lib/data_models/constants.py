TEXT_PARAM = "text"
TARGET_PARAM = "target"
TRANSLATED_TEXT_PARAM = "translatedText"

DEFAULT_LLM_API_BASE = "https://api.groq.com/openai/v1"
DEFAULT_LLM_MODEL = "meta-llama/llama-4-scout-17b-16e-instruct"

# Lower temperature → more predictable output
TRANSLATION_TEMPERATURE = 0.3

TRANSLATION_SYSTEM_PROMPT = "You are a helpful translation assistant."

TRANSLATION_PROMPT_TEMPLATE = (
    'Translate the following task from English to {target}:\n\n"{text}"\n\n'
    "Just return the translated sentence, nothing else."
)

# Languages offered by the task page: (label, code)
LANGUAGES = [
    ("Spanish", "es"),
    ("French", "fr"),
    ("Hindi", "hi"),
    ("German", "de"),
    ("Japanese", "ja"),
]
DEFAULT_TARGET_LANGUAGE = "es"
