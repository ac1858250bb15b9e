"""Tests for the explanation service and response parsing."""

from pathlib import Path

import pytest

from orbyt import explain as explain_module
from orbyt.explain import (
    MISSING_KEY_MESSAGE,
    NO_EXPLANATION_MESSAGE,
    Explanation,
    ExplanationService,
    parse_explanation,
)


class FakeService(ExplanationService):
    """Service whose model call is replaced by a canned reply."""

    def __init__(self, reply=None, error=None, **kwargs):
        kwargs.setdefault("api_key", "test-key")
        super().__init__(**kwargs)
        self.reply = reply
        self.error = error
        self.prompts = []

    def _generate(self, prompt):
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture(autouse=True)
def no_dotenv(monkeypatch):
    """Keep a developer's .env out of the tests."""
    monkeypatch.setattr(explain_module, "load_dotenv", lambda *args, **kwargs: False)


class TestExplanationService:
    """Tests for ExplanationService.explain."""

    def test_missing_key(self, monkeypatch):
        monkeypatch.delenv("GEMINI_API_KEY", raising=False)
        service = ExplanationService()
        assert service.explain(Path("a.ts"), "code") == MISSING_KEY_MESSAGE

    def test_key_from_environment(self, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "from-env")
        assert ExplanationService().api_key == "from-env"

    def test_explicit_key_wins(self, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "from-env")
        assert ExplanationService(api_key="explicit").api_key == "explicit"

    def test_prompt_contents(self):
        service = FakeService(reply="ok")
        service.explain(Path("/repo/src/app.ts"), "x" * 5000)
        (prompt,) = service.prompts
        assert "app.ts" in prompt
        assert "/repo/src" not in prompt
        assert "Explain it Like I'm 5" in prompt
        assert "INTERMEDIATE" in prompt
        assert "TECHNICAL" in prompt
        assert "x" * 3000 in prompt
        assert "x" * 3001 not in prompt

    def test_custom_truncation(self):
        service = FakeService(reply="ok", max_chars=10)
        service.explain(Path("a.ts"), "y" * 50)
        assert "y" * 10 in service.prompts[0]
        assert "y" * 11 not in service.prompts[0]

    def test_returns_trimmed_reply(self):
        assert FakeService(reply="  hello \n").explain(Path("a.ts"), "") == "hello"

    def test_empty_reply(self):
        assert FakeService(reply="").explain(Path("a.ts"), "") == NO_EXPLANATION_MESSAGE
        assert FakeService(reply=None).explain(Path("a.ts"), "") == NO_EXPLANATION_MESSAGE

    def test_request_failure_never_raises(self):
        service = FakeService(error=RuntimeError("quota exceeded"))
        assert service.explain(Path("a.ts"), "") == "Gemini request failed: quota exceeded"

    def test_explain_sections(self):
        reply = "Explain it Like I'm 5: A box.\nINTERMEDIATE: Stores data.\nTECHNICAL: A cache."
        result = FakeService(reply=reply).explain_sections(Path("a.ts"), "")
        assert result == Explanation("A box.", "Stores data.", "A cache.")


class TestParseExplanation:
    """Tests for parse_explanation."""

    def test_headings_on_their_own_lines(self):
        text = (
            "Explain it Like I'm 5\n"
            "It is like a librarian.\n\n"
            "INTERMEDIATE\n"
            "It indexes files.\n\n"
            "TECHNICAL\n"
            "It builds a basename map.\n"
        )
        result = parse_explanation(text)
        assert result.eli5 == "It is like a librarian."
        assert result.intermediate == "It indexes files."
        assert result.technical == "It builds a basename map."

    def test_numbered_and_emphasized_headings(self):
        text = (
            "1. **Explain it like I'm 5:** Simple.\n"
            "2. **Intermediate:** Medium.\n"
            "3. **Technical:** Deep.\n"
        )
        assert parse_explanation(text) == Explanation("Simple.", "Medium.", "Deep.")

    def test_missing_heading_left_empty(self):
        result = parse_explanation("INTERMEDIATE: Medium.\nTECHNICAL: Deep.")
        assert result.eli5 == ""
        assert result.intermediate == "Medium."

    def test_heading_word_inside_text_is_not_a_heading(self):
        text = "TECHNICAL: The intermediate results are cached.\nTechnical debt is low."
        result = parse_explanation(text)
        assert result.technical == "The intermediate results are cached.\nTechnical debt is low."

    def test_no_headings(self):
        """Unstructured text, including failure messages, lands in the first tier."""
        assert parse_explanation(MISSING_KEY_MESSAGE) == Explanation(eli5=MISSING_KEY_MESSAGE)

    def test_empty(self):
        assert parse_explanation("") == Explanation()

    def test_sections_titles(self):
        titles = [title for title, _ in Explanation("a", "b", "c").sections()]
        assert titles == ["Explain it Like I'm 5", "Intermediate", "Technical"]
