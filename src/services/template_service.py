"""Email template rendering with Jinja2."""

from dataclasses import dataclass
from datetime import datetime, timezone
from functools import lru_cache
from typing import Any

from jinja2 import BaseLoader, ChoiceLoader, DictLoader, Environment, FileSystemLoader, select_autoescape

from src.core.config import get_settings
from src.services.email_templates import BUILTIN_TEMPLATES, LOGO_URL, SITE_URL


@dataclass(frozen=True)
class RenderedEmail:
    """HTML and plain-text bodies of one email."""

    html: str
    text: str


@lru_cache
def get_template_environment(templates_dir: str | None = None) -> Environment:
    """Build the Jinja2 environment for email templates.

    Args:
        templates_dir: Optional directory whose ``<name>.html`` and
            ``<name>.txt`` files take precedence over the built-ins.

    Returns:
        Environment: Environment autoescaping ``.html`` templates only.
    """
    loaders: list[BaseLoader] = []
    if templates_dir:
        loaders.append(FileSystemLoader(templates_dir))
    loaders.append(DictLoader(BUILTIN_TEMPLATES))
    return Environment(
        loader=ChoiceLoader(loaders),
        autoescape=select_autoescape(enabled_extensions=("html",), default=False),
    )


def render_template(name: str, context: dict[str, Any]) -> RenderedEmail:
    """Render the HTML and text variants of a named email template.

    Args:
        name: Template name without extension, e.g. ``contact_admin``.
        context: Values referenced by the template.

    Returns:
        RenderedEmail: Rendered bodies.

    Raises:
        jinja2.TemplateNotFound: If no template with that name exists.
    """
    env = get_template_environment(get_settings().email_templates_dir)
    now = datetime.now(timezone.utc)
    values = {
        "logo_url": LOGO_URL,
        "site_url": SITE_URL,
        "saved_at": now.strftime("%Y-%m-%d %H:%M:%S UTC"),
        "year": now.year,
        **context,
    }
    return RenderedEmail(
        html=env.get_template(f"{name}.html").render(values),
        text=env.get_template(f"{name}.txt").render(values),
    )
