"""
Centralized configuration for LLM Prompts.

The summary parser depends on the response shape this prompt asks for
(a `TL;DR:` line followed by `-`/`*` bullets), so edit both together.
"""


class SummarizationPrompts:
    """Prompts for the Video Digest Service."""

    # Output language is fixed regardless of the video's language
    VIDEO_DIGEST = """Ты — профессиональный редактор. Твоя задача — сделать краткую выжимку (summary) из транскрипта YouTube видео.

Правила:
1. Язык ответа: Русский (даже если видео на английском).
2. Структура:
   - TL;DR (Одно предложение, суть видео).
   - Основные тезисы (список буллитов).
3. Стиль: Информативный, без воды.
4. Форматирование:
   - TL;DR: "TL;DR: [текст]"
   - Тезисы: "- [текст]" или "* [текст]"

Транскрипт:
{transcript}"""

    @classmethod
    def build_prompt(cls, transcript: str) -> str:
        """Embed the transcript verbatim at the end of the digest prompt."""
        return cls.VIDEO_DIGEST.format(transcript=transcript)
