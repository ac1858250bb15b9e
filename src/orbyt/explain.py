"""Plain-language explanations of a single source file via Gemini.

The service never raises: a missing credential, a failed request or an empty
response all come back as human-readable text that the caller can display
as-is.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_MODEL = "gemini-2.5-flash"
DEFAULT_MAX_CHARS = 3000
API_KEY_ENV = "GEMINI_API_KEY"

MISSING_KEY_MESSAGE = "GEMINI_API_KEY missing."
NO_EXPLANATION_MESSAGE = "No explanation generated."

ELI5_HEADING = "Explain it Like I'm 5"
INTERMEDIATE_HEADING = "INTERMEDIATE"
TECHNICAL_HEADING = "TECHNICAL"

PROMPT_TEMPLATE = """
Explain the purpose and functionality of the file {name} in three short paragraphs:
1. Use a simple analogy understandable by a child.
2. Provide a brief intermediate explanation of what the code does.
3. Give a concise technical description for an expert.
Keep each paragraph under 5 sentences and do not use markdown or formatting.

Separate them with {eli5}, {intermediate}, {technical} as the titles of each paragraph.
Code (first {max_chars} characters):
{code}
"""

# A heading line, optionally numbered or wrapped in markdown emphasis, with
# the paragraph either following a colon or starting on the next line.
_HEADING_RE = re.compile(
    r"^[ \t#>*\-\d.)]*"
    r"(?P<heading>explain\s+it\s+like\s+i['’]?m\s+5|eli5|intermediate|technical)"
    r"[ \t*#]*(?::|$)[ \t*]*",
    re.IGNORECASE | re.MULTILINE,
)


@dataclass(frozen=True)
class Explanation:
    """Three audience tiers of one explanation; absent tiers are empty."""

    eli5: str = ""
    intermediate: str = ""
    technical: str = ""

    def sections(self) -> list[tuple[str, str]]:
        return [
            (ELI5_HEADING, self.eli5),
            (INTERMEDIATE_HEADING.title(), self.intermediate),
            (TECHNICAL_HEADING.title(), self.technical),
        ]


def parse_explanation(text: str) -> Explanation:
    """Split a model response into its three tiers.

    Headings may appear in any order, be numbered, or be missing. Text before
    the first recognised heading belongs to no tier, unless there are no
    headings at all, in which case the whole response is the ELI5 tier.
    """
    text = (text or "").strip()
    matches = list(_HEADING_RE.finditer(text))
    if not matches:
        return Explanation(eli5=text)

    parts: dict[str, str] = {}
    for i, match in enumerate(matches):
        end = matches[i + 1].start() if i + 1 < len(matches) else len(text)
        body = text[match.end():end].strip()
        key = _tier(match.group("heading"))
        # First occurrence wins when a heading is repeated
        parts.setdefault(key, body)

    return Explanation(
        eli5=parts.get("eli5", ""),
        intermediate=parts.get("intermediate", ""),
        technical=parts.get("technical", ""),
    )


def _tier(heading: str) -> str:
    heading = heading.lower()
    if heading.startswith(("explain", "eli5")):
        return "eli5"
    return heading


class ExplanationService:
    """Ask Gemini to explain a file at three levels of detail.

    The API key comes from ``api_key`` or the ``GEMINI_API_KEY`` environment
    variable (a ``.env`` file is honoured).

    Usage:
        service = ExplanationService()
        text = service.explain(Path("src/app.ts"), source)
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = DEFAULT_MODEL,
        max_chars: int = DEFAULT_MAX_CHARS,
    ):
        load_dotenv()
        self.api_key = api_key or os.getenv(API_KEY_ENV)
        self.model = model
        self.max_chars = max_chars

    def build_prompt(self, file_path: Path, source: str) -> str:
        return PROMPT_TEMPLATE.format(
            name=Path(file_path).name,
            eli5=ELI5_HEADING,
            intermediate=INTERMEDIATE_HEADING,
            technical=TECHNICAL_HEADING,
            max_chars=self.max_chars,
            code=source[: self.max_chars],
        )

    def explain(self, file_path: Path, source: str) -> str:
        """Explanation text for one file, or a readable failure message."""
        if not self.api_key:
            logger.warning(f"{API_KEY_ENV} is not set; explanations are unavailable")
            return MISSING_KEY_MESSAGE

        prompt = self.build_prompt(file_path, source)
        try:
            text = self._generate(prompt)
        except Exception as e:
            logger.warning(f"Gemini request failed for {file_path}: {e}")
            return f"Gemini request failed: {e}"

        if not text or not text.strip():
            return NO_EXPLANATION_MESSAGE
        return text.strip()

    def explain_sections(self, file_path: Path, source: str) -> Explanation:
        return parse_explanation(self.explain(file_path, source))

    def _generate(self, prompt: str) -> Optional[str]:
        import google.generativeai as genai

        genai.configure(api_key=self.api_key)
        response = genai.GenerativeModel(self.model).generate_content(prompt)
        return response.text
