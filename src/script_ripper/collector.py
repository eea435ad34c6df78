from __future__ import annotations

from typing import TYPE_CHECKING

from script_ripper.languages import is_script_language
from script_ripper.logging import logger

if TYPE_CHECKING:
    from collections.abc import Iterator


class BlockCollector:
    """Buffer code block texts per language, in document order.

    Languages keep the order in which they were first seen; that order drives
    file emission and therefore the order of the generated links.
    """

    def __init__(self) -> None:
        self._blocks: dict[str, list[str]] = {}

    def on_block(self, language: str | None, text: str) -> bool:
        """Record one code block.

        Unsupported languages are ignored. The text is stored verbatim.

        Args:
            language (str | None): the code block language identifier
            text (str): the raw code text

        Returns:
            bool: True if the block was collected
        """
        if not is_script_language(language):
            logger.debug("code_block_skipped", language=language)
            return False
        self._blocks.setdefault(language, []).append(text)
        logger.debug("code_block_collected", language=language, count=len(self._blocks[language]))
        return True

    @property
    def languages(self) -> list[str]:
        return list(self._blocks)

    def blocks(self, language: str) -> list[str]:
        return list(self._blocks.get(language, ()))

    def items(self) -> Iterator[tuple[str, list[str]]]:
        """Yield (language, blocks) for each language with at least one block."""
        for language, blocks in self._blocks.items():
            if blocks:
                yield language, list(blocks)

    def __len__(self) -> int:
        return sum(len(blocks) for blocks in self._blocks.values())
