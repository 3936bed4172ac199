"""
jsau-apiserver — HTML Document Directory
=========================================

What:  Resolves file names inside the HTML document directory and checks
       that documents exist.
Why:   Three endpoints turn client input into a path (GET /search?recette=,
       GET /recette/{id}, POST /favorites). Centralizing the resolution means
       one place enforces that the result stays inside the directory.
How:   Paths are resolved (symlinks and ".." collapsed) and must have the
       directory as an ancestor; existence checks use async I/O.

Directory layout:
    html_files/
    ├── soupe_a_l_oignon.html
    ├── tarte_tatin.html
    └── ...

    Document names are derived from recipe titles by document_filename():
    whitespace runs become "_" and the result is lowercased.
"""

import logging
import os
import re
from pathlib import Path
from typing import Union

import aiofiles.os

from apiserver.exceptions import ValidationError

logger = logging.getLogger(__name__)

DOCUMENT_EXTENSION = ".html"

_WHITESPACE_RUN = re.compile(r"\s+")


def document_filename(title: str) -> str:
    """
    Derive the document file name for a recipe title.

    Example: "Soupe à l'oignon" → "soupe_à_l'oignon.html"
    """
    return f"{_WHITESPACE_RUN.sub('_', title).lower()}{DOCUMENT_EXTENSION}"


class DocumentDirectory:
    """
    Read-only view of the HTML document directory.

    Nothing here writes to the directory; documents are managed outside the API.
    """

    def __init__(self, root: Union[str, Path]):
        self.root = Path(root).resolve()

    def resolve(self, filename: str, plain_text: bool = False) -> Path:
        """
        Map a client-supplied file name to an absolute path inside the directory.

        Names the OS cannot represent (an embedded NUL byte, for instance) are
        resolved lexically; exists() then reports them as missing.

        Raises:
            ValidationError: The name resolves outside the directory
                (e.g. "../recettes.json" or an absolute path).
        """
        try:
            candidate = (self.root / filename).resolve()
        except (OSError, ValueError) as e:
            logger.debug("Cannot resolve document name %r: %s", filename, e)
            candidate = Path(os.path.normpath(self.root / filename))

        if self.root not in candidate.parents:
            logger.warning("Rejected document path outside %s: %r", self.root, filename)
            raise ValidationError(
                message="Invalid file path.",
                field="filename",
                context={"filename": filename},
                plain_text=plain_text,
            )
        return candidate

    async def exists(self, path: Path) -> bool:
        try:
            return await aiofiles.os.path.isfile(path)
        except (OSError, ValueError):
            return False

    async def is_available(self) -> bool:
        return await aiofiles.os.path.isdir(self.root)
