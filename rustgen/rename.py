"""Lower snake-case the generated api_client file names.

Runs after generation: PetApiClient.rs -> pet_api_client.rs, matching
the module names declared in mod.rs.
"""

from __future__ import annotations

import logging
from pathlib import Path

from .codegen import API_CLIENT_DIR
from .naming import to_file_name

logger = logging.getLogger(__name__)


def post_process_rename_files(output_dir: Path) -> list[Path]:
    """Rename every .rs file in src/api_client; returns the resulting paths."""
    client_dir = output_dir / API_CLIENT_DIR
    renamed: list[Path] = []
    for path in sorted(client_dir.glob("*.rs")):
        target = path.with_name(to_file_name(path.name))
        if target != path:
            logger.debug("renaming %s -> %s", path.name, target.name)
            path.rename(target)
        renamed.append(target)
    return sorted(renamed)
