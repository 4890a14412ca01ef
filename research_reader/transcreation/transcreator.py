"""LLM-backed transcreation of extracted text."""

from pathlib import Path

from research_reader.logging.logger import Log
from research_reader.transcreation.base import BaseTranscreationClient
from research_reader.transcreation.models import Completion
from research_reader.transcreation.prompt_loader import load_prompt_template


class Transcreator:
    """Adapts source text into a target language for spoken delivery."""

    def __init__(
        self,
        *,
        client: BaseTranscreationClient,
        model: str,
        temperature: float = 0.4,
        prompt_template_path: Path | None = None,
        system_prompt: str = "",
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = max(0.0, min(1.0, temperature))
        self._system_prompt = system_prompt
        self._prompt_template = load_prompt_template(prompt_template_path)

    def transcreate(self, text: str, target_language: str) -> Completion:
        prompt = self._build_prompt(text, target_language)
        Log.debug(f"Transcreation prompt:\n{prompt}")

        completion = self._client.create_completion(
            model=self._model,
            temperature=self._temperature,
            system_prompt=self._system_prompt,
            user_prompt=prompt,
        )
        Log.info(
            f"Transcreation to {target_language} complete: "
            f"{len(completion.text)} chars, {completion.tokens_used} tokens"
        )
        return completion

    def _build_prompt(self, text: str, target_language: str) -> str:
        return self._prompt_template.format(
            target_language=target_language,
            source_text=text,
        )

    def close(self) -> None:
        self._client.close()
