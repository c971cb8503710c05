"""Render templates and write generated Rust clients.

Takes the context from context_builder and produces one
src/api_client/<Client>.rs per client plus mod.rs.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import jinja2
from markupsafe import Markup

from .header_emitter import emit_headers
from .model import GenerationMode
from .naming import to_file_name, to_param_name
from .params import has_header_or_cookie
from .path_emitter import emit_path
from .query_emitter import emit_query
from .type_mapper import map_type

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent / "templates"
CLIENT_TEMPLATE = "api_client.rs.j2"
API_CLIENT_DIR = Path("src") / "api_client"


def make_environment(
    mode: GenerationMode = GenerationMode.STANDARD,
    template_dir: Path | None = None,
) -> jinja2.Environment:
    """Jinja2 environment with the emitters exposed as filters and globals."""
    env = jinja2.Environment(
        loader=jinja2.FileSystemLoader(str(template_dir or TEMPLATE_DIR)),
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )

    def type_convert(schema, required=True):
        if not isinstance(required, bool):
            required = True
        return Markup(map_type(schema, required, mode))

    env.filters.update({
        "type_convert": type_convert,
        "to_param_name": to_param_name,
        "set_path_parameters": lambda path, params: Markup(emit_path(path, params, mode)),
        "query_string_snippet": lambda params: Markup(emit_query(params, mode)),
        "header_params_snippet": lambda params: Markup(emit_headers(params, mode)),
    })
    # the bundled template reads op.has_headers; custom --template-dir templates use this
    env.globals["header_parameters_exist"] = has_header_or_cookie
    return env


def render_client(env: jinja2.Environment, context: dict[str, Any], client: str) -> str:
    template = env.get_template(CLIENT_TEMPLATE)
    return template.render(
        **context,
        client=client,
        client_operations=context["clients"][client],
    )


def generate(
    context: dict[str, Any],
    output_dir: Path,
    template_dir: Path | None = None,
) -> list[Path]:
    """Render every client and write it under ``output_dir``."""
    env = make_environment(context["mode"], template_dir)
    client_dir = output_dir / API_CLIENT_DIR
    client_dir.mkdir(parents=True, exist_ok=True)

    written: list[Path] = []
    for client in context["clients"]:
        output_path = client_dir / f"{client}.rs"
        output_path.write_text(render_client(env, context, client))
        logger.info("wrote %s (%d operations)", output_path, len(context["clients"][client]))
        written.append(output_path)

    modules = sorted(to_file_name(p.name).removesuffix(".rs") for p in written)
    mod_path = client_dir / "mod.rs"
    mod_path.write_text("".join(f"pub mod {m};\n" for m in modules))
    written.append(mod_path)

    return written
