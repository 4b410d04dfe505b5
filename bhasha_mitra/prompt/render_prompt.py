"""Render the branch prompt templates in bhasha_mitra/prompt/promptFiles using pystache.

Each provider branch has one template (``main.md``, ``tone.md``, ``style.md``,
``content.md``) sharing the ``output_rules`` partial. Leading/trailing code
fences are stripped from partials so they can be authored as ```markdown
blocks.

Usage:
    python -m bhasha_mitra.prompt.render_prompt [branch] [document.txt]

If no arguments are given, it renders the main template for a short sample
sentence and prints to stdout.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pystache

from ..llm.provider import ProviderRequest
from ..models.enums import Branch, DocType, LanguageStyle

PROMPTS_DIR = Path(__file__).parent / "promptFiles"

TONE_OPTIONS: dict[str, str] = {
    "formal": "formal (আনুষ্ঠানিক)",
    "informal": "informal (অনানুষ্ঠানিক)",
    "professional": "professional (পেশাদার)",
    "friendly": "friendly (বন্ধুত্বপূর্ণ)",
    "respectful": "respectful (সম্মানজনক)",
    "persuasive": "persuasive (প্ররোচনামূলক)",
}

_PARTIALS = ("output_rules",)


def _read_prompt(name: str) -> str:
    p = PROMPTS_DIR / name
    if not p.exists():
        raise FileNotFoundError(f"Prompt file not found: {p}")
    return p.read_text(encoding="utf-8")


def _strip_code_fences(s: str) -> str:
    """Strip a single leading and trailing code-fence line if present."""
    lines = s.splitlines()
    if not lines:
        return s
    if lines[0].lstrip().startswith("```"):
        lines = lines[1:]
    if lines and lines[-1].lstrip().startswith("```"):
        lines = lines[:-1]
    return "\n".join(lines).strip()


def tone_name(tone: str | None) -> str:
    """Return the display name for a tone id; unknown ids are used verbatim."""
    if not tone:
        return ""
    return TONE_OPTIONS.get(tone.strip().lower(), tone.strip())


def render_template(template_name: str, context: dict | None = None) -> str:
    template = _read_prompt(template_name)
    partials = {name: _strip_code_fences(_read_prompt(f"{name}.md")) for name in _PARTIALS}
    renderer = pystache.Renderer(partials=partials, missing_tags="ignore")
    return renderer.render(template, context or {}).strip()


def render_branch_prompt(request: ProviderRequest) -> str:
    """Render the prompt for the branch named in ``request``."""
    context = {
        "document_text": request.document_text,
        "role_instruction": request.doc_type.role_instruction,
        "tone_name": tone_name(request.tone),
        "style_name": request.style.label,
    }
    return render_template(f"{request.branch.value}.md", context)


if __name__ == "__main__":
    branch = Branch(sys.argv[1]) if len(sys.argv) > 1 else Branch.MAIN
    text = "আমি ভাল আছি।"
    if len(sys.argv) > 2:
        text = Path(sys.argv[2]).read_text(encoding="utf-8")
    print(
        render_branch_prompt(
            ProviderRequest(
                document_text=text,
                branch=branch,
                doc_type=DocType.GENERIC,
                credential="",
                tone="formal",
                style=LanguageStyle.CHOLITO,
            )
        )
    )
