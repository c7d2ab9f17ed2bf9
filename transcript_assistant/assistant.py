# transcript_assistant/assistant.py
"""
LLM question answering and summarization over transcript text.

AI usage follows project guidelines:
- Prompts versioned and isolated as module constants
- Invocation isolated behind TextGenerator (Gemini in production, fakes in tests)
- Input bounded: transcript text is truncated before it reaches a prompt
"""

from __future__ import annotations

from typing import Optional, Protocol, Sequence

import google.generativeai as genai
from pydantic import BaseModel


PROMPT_TEXT_LIMIT = 5000

# Versioned prompts; change only with justification
QUESTION_PROMPT = (
    'Based on this video transcript: "{transcript}..."\n'
    "{conversation}please answer this question: {question}\n"
    "Please provide a clear and concise response based on the video content. Make it 3-4 sentences."
)

SUMMARY_PROMPT = "Please provide a concise summary of the following text: {text}..."

EXPAND_SUMMARY_PROMPT = """
Based on this video transcript: "{text}..."

Current summary: "{current_summary}"

Please add 2 sentences that provide additional details, specific examples, or key concepts that weren't mentioned in the current summary.
Focus on interesting or important information that adds value to the summary.
Do not repeat information that's already in the summary.
Return the complete text (current summary + new detailed sentences).
Make the transition between the current summary and new information smooth.
""".strip()


class AssistantError(Exception):
    """The LLM call failed or returned no usable text."""


class ChatMessage(BaseModel):
    """One prior turn of the conversation about a video."""
    role: str
    content: str


class TextGenerator(Protocol):
    """Isolated LLM invocation: prompt in, completion text out."""

    def generate(self, prompt: str) -> str:
        ...


class GeminiGenerator:
    """TextGenerator backed by google-generativeai."""

    def __init__(self, api_key: str, model_name: str) -> None:
        genai.configure(api_key=api_key)
        self.model_name = model_name
        self._model = genai.GenerativeModel(model_name)

    def generate(self, prompt: str) -> str:
        try:
            response = self._model.generate_content(prompt)
            return response.text
        except Exception as exc:  # pylint: disable=broad-except
            raise AssistantError(str(exc)) from exc


def truncate(text: str, limit: int = PROMPT_TEXT_LIMIT) -> str:
    return (text or "")[:limit]


def format_history(history: Optional[Sequence[ChatMessage]]) -> str:
    """Render prior turns as the conversation preamble; empty when there is no history."""
    if not history:
        return ""
    lines = [
        f"{'Human' if message.role == 'user' else 'Assistant'}: {message.content}"
        for message in history
    ]
    return "Previous conversation:\n" + "\n".join(lines) + "\n\nNow, "


def build_question_prompt(question: str, transcript: str, history: Optional[Sequence[ChatMessage]] = None) -> str:
    return QUESTION_PROMPT.format(
        transcript=truncate(transcript),
        conversation=format_history(history),
        question=question,
    )


def build_summary_prompt(text: str) -> str:
    return SUMMARY_PROMPT.format(text=truncate(text))


def build_expand_summary_prompt(text: str, current_summary: str) -> str:
    return EXPAND_SUMMARY_PROMPT.format(text=truncate(text), current_summary=current_summary)


class TranscriptAssistant:
    """Answers questions about, summarizes, and expands summaries of transcript text."""

    def __init__(self, generator: TextGenerator) -> None:
        self._generator = generator

    def ask(self, question: str, transcript: str, history: Optional[Sequence[ChatMessage]] = None) -> str:
        return self._complete(build_question_prompt(question, transcript, history))

    def summarize(self, text: str) -> str:
        return self._complete(build_summary_prompt(text))

    def expand_summary(self, text: str, current_summary: str) -> str:
        return self._complete(build_expand_summary_prompt(text, current_summary))

    def _complete(self, prompt: str) -> str:
        try:
            completion = self._generator.generate(prompt)
        except AssistantError:
            raise
        except Exception as exc:  # pylint: disable=broad-except
            raise AssistantError(str(exc)) from exc

        if not completion or not completion.strip():
            raise AssistantError("The language model returned an empty response")
        return completion
