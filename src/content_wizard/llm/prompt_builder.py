"""
Prompt builder for generation requests.

Responsible for:
- Loading and rendering the Jinja2 prompt templates shipped in prompts/
- Mapping preset rewrite actions to instructions
- Describing JSON output schemas for schema-constrained tasks
"""

from pathlib import Path
from typing import Any, Optional

import structlog
from jinja2 import Environment, FileSystemLoader, StrictUndefined

from content_wizard.models.enums import TextAction

logger = structlog.get_logger(__name__)

DEFAULT_TEMPLATES_DIR = Path(__file__).parent / "prompts"

TEXT_ACTION_INSTRUCTIONS = {
    TextAction.SHORTEN.value: "Condense this text significantly. Remove fluff. Keep the core meaning.",
    TextAction.ELABORATE.value: "Expand on this text with more details, examples, and context.",
    TextAction.FORMALIZE.value: "Rewrite this text to be professional, authoritative, and business-appropriate.",
    TextAction.SIMPLIFY.value: "Simplify the language to an 8th-grade reading level for maximum accessibility.",
    TextAction.SUMMARIZE.value: 'Create a bolded "Key Takeaway" summary of this text.',
    TextAction.HUMANIZE.value: 'Inject conversational nuance. Use "we", "you", and authentic phrasing to sound less like a robot.',
}

IMAGE_STYLE = (
    "Authentic editorial photography, natural lighting, shot on 35mm film, minimal processing, "
    "photorealistic, highly detailed, cinematic composition. Wide angle 16:9 aspect ratio. "
    "Avoid oversaturated colors, avoid plastic skin textures, avoid surrealism, avoid 3D render "
    "styles, avoid AI-generated look."
)

IMAGE_EDIT_STYLE = (
    "Ensure result looks like authentic editorial photography, natural lighting, photorealistic. "
    "Avoid AI-generated look."
)

# === Output schemas (Gemini schema dialect) ===

STRING_ARRAY_SCHEMA = {"type": "ARRAY", "items": {"type": "STRING"}}

INTERNAL_LINKS_SCHEMA = {
    "type": "ARRAY",
    "items": {
        "type": "OBJECT",
        "properties": {"title": {"type": "STRING"}, "url": {"type": "STRING"}},
        "required": ["title", "url"],
    },
}

SOCIAL_POSTS_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        network: {"type": "STRING"} for network in ("twitter", "linkedin", "reddit", "instagram", "facebook")
    },
}


def instruction_for_action(action: str) -> str:
    """Preset instruction for a known action; any other text is the instruction itself."""
    return TEXT_ACTION_INSTRUCTIONS.get(action, action)


class PromptBuilder:
    """
    Render prompts from Jinja2 templates.

    Templates are plain text with `{{ }}` placeholders; autoescaping is off
    (we are generating prompts, not HTML) and undefined variables raise.
    """

    def __init__(self, templates_dir: Optional[Path | str] = None):
        """
        Initialize prompt builder.

        Args:
            templates_dir: Directory containing *.j2 templates (defaults to
                the templates shipped with the package)
        """
        self.templates_dir = Path(templates_dir) if templates_dir else DEFAULT_TEMPLATES_DIR

        self.jinja_env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            trim_blocks=True,
            lstrip_blocks=True,
            autoescape=False,
            undefined=StrictUndefined,
            keep_trailing_newline=False,
        )

        logger.info("PromptBuilder initialized", templates_dir=str(self.templates_dir))

    def render(self, name: str, **context: Any) -> str:
        """
        Render template `name` (without the .j2 suffix).

        Raises:
            jinja2.TemplateNotFound: Unknown template
            jinja2.UndefinedError: Missing template variable
        """
        template = self.jinja_env.get_template(f"{name}.j2")
        return template.render(**context).strip()
