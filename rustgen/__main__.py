"""Entry point: python -m rustgen SPEC

Reads an OpenAPI document and writes Rust reqwest clients under
<output>/src/api_client/.
"""

from __future__ import annotations

from pathlib import Path

import click

from .codegen import generate
from .context_builder import build_context
from .errors import TemplateResolutionError
from .loader import load_spec
from .logging_utils import configure_logging
from .model import GenerationMode
from .rename import post_process_rename_files

DEFAULT_OUTPUT_DIR = Path("generated")


@click.command()
@click.argument("spec_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("-o", "--output", type=click.Path(file_okay=False, path_type=Path),
              default=DEFAULT_OUTPUT_DIR, envvar="RUSTGEN_OUTPUT", show_default=True,
              help="Directory the client crate sources are written to.")
@click.option("--mode", type=click.Choice([m.value for m in GenerationMode]),
              default=GenerationMode.STANDARD.value, envvar="RUSTGEN_MODE", show_default=True,
              help="foreign-safe emits abi_stable types for FFI clients.")
@click.option("--template-dir", type=click.Path(exists=True, file_okay=False, path_type=Path),
              default=None, help="Override the bundled templates.")
@click.option("--log-level", default="WARNING", envvar="RUSTGEN_LOG_LEVEL", show_default=True)
def main(spec_path: Path, output: Path, mode: str, template_dir: Path | None, log_level: str) -> None:
    """Generate Rust API clients from an OpenAPI document."""
    configure_logging(log_level)
    spec = load_spec(spec_path)
    try:
        context = build_context(spec, GenerationMode(mode))
    except TemplateResolutionError as e:
        raise click.ClickException(str(e)) from e

    generate(context, output, template_dir)
    files = post_process_rename_files(output)
    click.echo(
        f"Generated {len(files)} files in {output / 'src' / 'api_client'}"
        f" ({context['operation_count']} operations)"
    )


if __name__ == "__main__":
    main()
