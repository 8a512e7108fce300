"""Contains utilities for rendering the dashboard's Jinja2 templates."""

from datetime import datetime
from pathlib import Path

import jinja2
import structlog
from pydantic import BaseModel

from github_users_dashboard.utils.constants import NO_NAME_PLACEHOLDER

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

TEMPLATES_DIRECTORY = Path(__file__).parent.parent / "templates"


def format_date(value: datetime | None) -> str:
    """Format a timestamp as a calendar date, or an empty string when missing."""
    if value is None:
        return ""
    return value.strftime("%Y-%m-%d")


def construct_jinja2_environment(templates_directory: Path = TEMPLATES_DIRECTORY) -> jinja2.Environment:
    """Construct a Jinja2 environment that loads the dashboard templates."""
    jinja_env = jinja2.Environment(
        loader=jinja2.FileSystemLoader(templates_directory),
        undefined=jinja2.StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )
    jinja_env.filters["date"] = format_date
    jinja_env.globals["no_name"] = NO_NAME_PLACEHOLDER
    return jinja_env


def construct_jinja2_template_from_string(template_string: str, environment: jinja2.Environment | None = None) -> jinja2.Template:
    """Construct a Jinja2 template from a string."""
    if environment is None:
        environment = construct_jinja2_environment()
    return environment.from_string(template_string)


def construct_jinja2_template_from_package(template_name: str, environment: jinja2.Environment | None = None) -> jinja2.Template:
    """Construct a Jinja2 template shipped in the package's templates directory."""
    if environment is None:
        environment = construct_jinja2_environment()
    try:
        return environment.get_template(template_name)
    except jinja2.TemplateNotFound:
        logger.error("Jinja2 template not found", template_name=template_name)
        raise


def render_template_with_model(model: BaseModel, template: jinja2.Template) -> str:
    """Render a Jinja2 template against a Pydantic model."""
    try:
        rendered_template = template.render(model.model_dump())
    except jinja2.UndefinedError as exc:
        logger.error("Failed to render template with model", model_type=type(model).__name__, error=str(exc))
        raise
    return rendered_template
