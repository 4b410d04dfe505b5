"""Prompt templates for each provider branch."""

from __future__ import annotations

from .render_prompt import TONE_OPTIONS, render_branch_prompt, render_template, tone_name

__all__ = ["TONE_OPTIONS", "render_branch_prompt", "render_template", "tone_name"]
