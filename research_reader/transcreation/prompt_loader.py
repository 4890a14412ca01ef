from pathlib import Path

from research_reader.errors import ReaderError

_DEFAULT_PROMPT_DIR = Path(__file__).parent / "prompts"


def load_prompt_template(path: Path | None = None) -> str:
    """Load the transcreation prompt template from a file.

    Args:
        path: Path to the prompt template file.
              Defaults to the bundled transcreation_prompt.txt.

    Returns:
        The raw template with ``{target_language}`` and ``{source_text}``
        placeholders.

    Raises:
        ReaderError: if the file cannot be read.
    """
    if path is None:
        path = _DEFAULT_PROMPT_DIR / "transcreation_prompt.txt"
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ReaderError(f"Failed to load prompt template: {exc}") from exc
