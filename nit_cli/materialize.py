"""Template materialization - instantiate a catalog entry into a directory."""

import logging
import subprocess
from pathlib import Path

from .sources.errors import MaterializeError
from .sources.models import TemplateEntry

logger = logging.getLogger(__name__)


class NixFlakeMaterializer:
    """Instantiate templates with ``nix flake init -t``."""

    def __init__(self, nix: str = "nix"):
        self.nix = nix

    def materialize(self, entry: TemplateEntry, target: Path) -> None:
        """Run ``nix flake init -t <uri>#<identifier>`` inside ``target``.

        Args:
            entry: Catalog entry to instantiate
            target: Directory to initialize (created if missing)

        Raises:
            MaterializeError: nix is missing or exits non-zero
        """
        target.mkdir(parents=True, exist_ok=True)
        cmd = [self.nix, "flake", "init", "-t", entry.reference]

        logger.info(f"Initializing {entry.reference} in {target}")
        logger.debug(f"Running: {' '.join(cmd)}")
        try:
            subprocess.run(cmd, check=True, capture_output=True, text=True, cwd=str(target))
        except FileNotFoundError as e:
            raise MaterializeError(f"Command not found: {self.nix}") from e
        except subprocess.CalledProcessError as e:
            stderr = (e.stderr or "").strip()
            raise MaterializeError(f"failed to run nix flake init -t {entry.reference}, err: {stderr}") from e

    def __repr__(self) -> str:
        return f"NixFlakeMaterializer({self.nix})"
