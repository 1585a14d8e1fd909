"""Grammar resolution and loading.

Maps file paths to grammar identifiers and lazily loads the tree-sitter
``Language`` objects from the installed grammar packages.
"""

from __future__ import annotations

import importlib
import importlib.util
from pathlib import Path

import structlog
import tree_sitter

from funsig.core.errors import GrammarError
from funsig.extract.packs import PACKS, SKIPPED_EXTENSIONS, get_pack, get_pack_for_ext

logger = structlog.get_logger()


def is_grammar_installed(grammar: str) -> bool:
    """Check whether the grammar package for a grammar id is importable."""
    pack = get_pack(grammar)
    if pack is None:
        return False
    return importlib.util.find_spec(pack.grammar_module) is not None


def installed_grammars() -> list[str]:
    """Grammar ids whose packages are importable, in registry order."""
    return [name for name in PACKS if is_grammar_installed(name)]


class GrammarResolver:
    """Resolves files to grammars and caches loaded grammars.

    The cache is per instance: parsers built from one resolver share loaded
    grammars, separate resolvers load independently.
    """

    def __init__(self) -> None:
        self._languages: dict[str, tree_sitter.Language] = {}

    def resolve(self, path: str | Path) -> str | None:
        """Return the grammar id for a path, or None when it is not parsed.

        Extension matching is case-insensitive. JSON files are recognized and
        skipped; unknown extensions are unsupported.
        """
        ext = Path(path).suffix.lower()
        if ext in SKIPPED_EXTENSIONS:
            logger.warning("json_file_skipped", path=str(path))
            return None
        pack = get_pack_for_ext(ext)
        if pack is None:
            logger.warning("unsupported_extension", path=str(path), ext=ext)
            return None
        return pack.name

    def load(self, grammar: str) -> tree_sitter.Language:
        """Load (or fetch from cache) the Language for a grammar id.

        Raises:
            GrammarError: Unknown grammar id, grammar package missing, or the
                package's language is incompatible with the tree-sitter runtime.
        """
        cached = self._languages.get(grammar)
        if cached is not None:
            return cached

        pack = get_pack(grammar)
        if pack is None:
            raise GrammarError.not_available(grammar, "", "unknown grammar")

        try:
            module = importlib.import_module(pack.grammar_module)
            language_func = getattr(module, pack.language_func)
            language = tree_sitter.Language(language_func())
        except ImportError as e:
            raise GrammarError.not_available(grammar, pack.grammar_package, "not installed") from e
        except (AttributeError, ValueError) as e:
            raise GrammarError.not_available(grammar, pack.grammar_package, str(e)) from e

        self._languages[grammar] = language
        logger.debug("grammar_loaded", grammar=grammar, module=pack.grammar_module)
        return language
