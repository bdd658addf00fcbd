"""pygls based Language Server entrypoint."""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Optional

from lsprotocol.types import InitializedParams, MessageType
from pygls.server import LanguageServer

from modelicafmt import __version__
from modelicafmt.config import load_workspace_config
from modelicafmt.formatting import FormattingOptions

from .handlers import register_all

logger = logging.getLogger(__name__)


class ModelicaLanguageServer(LanguageServer):
    """Concrete LanguageServer holding the workspace formatting options."""

    def __init__(self, options: Optional[FormattingOptions] = None) -> None:
        super().__init__(name="modelicafmt-lsp", version=__version__)
        self.formatting_options = options or FormattingOptions()
        self._options_pinned = options is not None
        register_all(self)
        self._register_lifecycle_handlers()

    def load_workspace_options(self, root_path: Optional[str]) -> None:
        """Read formatting options from the workspace configuration, unless pinned."""
        if self._options_pinned or not root_path:
            return
        config = load_workspace_config(Path(root_path))
        self.formatting_options = config.formatting_options()
        logger.info("Formatting options for %s: %s", config.root, self.formatting_options)

    def apply_workspace_options(self, root_path: Optional[str]) -> None:
        """Load workspace options, reporting a broken configuration to the client."""
        try:
            self.load_workspace_options(root_path)
        except (tomllib.TOMLDecodeError, ValueError) as exc:
            logger.error("Ignoring workspace configuration: %s", exc)
            self.show_message(
                f"modelicafmt: invalid configuration, using defaults ({exc})",
                msg_type=MessageType.Error,
            )

    def _register_lifecycle_handlers(self) -> None:
        @self.feature("initialized")
        def _on_initialized(ls: "ModelicaLanguageServer", params: InitializedParams) -> None:  # noqa: ARG001
            ls.apply_workspace_options(ls.workspace.root_path)


def create_server(options: Optional[FormattingOptions] = None) -> ModelicaLanguageServer:
    return ModelicaLanguageServer(options)


__all__ = ["ModelicaLanguageServer", "create_server"]
