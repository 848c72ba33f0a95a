from pathlib import Path
from typing import Mapping, Any

from jinja2 import Environment, FileSystemLoader, select_autoescape

# pricing_table/
#   templates.py  (dit bestand)
#   templates/
#     pricing_table.html

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"

_env = Environment(
    loader=FileSystemLoader(str(TEMPLATES_DIR)),
    autoescape=select_autoescape(["html", "xml"]),
    trim_blocks=True,
    lstrip_blocks=True,
)


def render_template(name: str, context: Mapping[str, Any]) -> str:
    """
    Render een Jinja2-template naar een HTML-string.

    Voorbeeld:
        html = render_template("pricing_table.html", {"table": table})
    """
    template = _env.get_template(name)
    return template.render(**context)
