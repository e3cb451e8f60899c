"""Prompt templates using Jinja2."""

from pathlib import Path

from jinja2 import Environment, FileSystemLoader

PROMPTS_DIR = Path(__file__).parent
_env = Environment(loader=FileSystemLoader(PROMPTS_DIR), keep_trailing_newline=True)


def render_review_system_prompt() -> str:
    """Render the system prompt shared by every file review."""
    template = _env.get_template("review_system.jinja2")
    return template.render()


def render_code_review_prompt(filename: str, patch: str) -> str:
    """Render the per-file code review prompt."""
    template = _env.get_template("code_review.jinja2")
    return template.render(filename=filename, patch=patch)
