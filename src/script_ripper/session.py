from __future__ import annotations

from typing import TYPE_CHECKING, Any

from script_ripper.assembler import assemble
from script_ripper.collector import BlockCollector
from script_ripper.emitter import EmissionFailure, EmittedFile, derive_base_name, emit
from script_ripper.logging import logger, set_debug
from script_ripper.section import build_section, is_slide_format, place_section
from script_ripper.settings import RipperSettings, resolve_settings

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

    from script_ripper.nodes import Document


class ProcessingSession:
    """State of one document-processing run.

    The host calls :meth:`on_metadata` once, :meth:`on_code_block` for every
    code block in document order, then :meth:`finish` at the end of the
    document. A session is not reused across documents.
    """

    def __init__(self, settings: RipperSettings | None = None) -> None:
        self.metadata: dict[str, Any] = {}
        self.settings = settings or RipperSettings()
        self.collector = BlockCollector()
        self.emitted: list[EmittedFile] = []
        self.failures: list[EmissionFailure] = []
        self._settings_overridden = settings is not None

    def on_metadata(self, metadata: Mapping[str, Any]) -> RipperSettings:
        self.metadata = dict(metadata)
        if not self._settings_overridden:
            self.settings = resolve_settings(metadata)
        set_debug(enabled=self.settings.debug)
        return self.settings

    def on_code_block(self, language: str | None, text: str) -> None:
        self.collector.on_block(language, text)

    def base_name(self, output_file: str | Path | None = None) -> str:
        if self.settings.output_name is not None:
            return self.settings.output_name
        return derive_base_name(output_file)

    def emit_files(self, output_file: str | Path | None = None) -> list[EmittedFile]:
        """Assemble and write one script per collected language, in first-seen order.

        Args:
            output_file (str | Path | None): the rendered document path, used to name scripts

        Returns:
            list[EmittedFile]: the scripts written successfully
        """
        base_name = self.base_name(output_file)
        for language, blocks in self.collector.items():
            content = assemble(language, blocks, self.metadata, self.settings)
            result = emit(base_name, language, content)
            if isinstance(result, EmittedFile):
                self.emitted.append(result)
            else:
                self.failures.append(result)
        logger.debug("scripts_emitted", created=len(self.emitted), failed=len(self.failures))
        return list(self.emitted)

    def finish(
        self,
        document: Document,
        *,
        target_format: str | None = None,
        output_file: str | Path | None = None,
    ) -> Document:
        """Write the scripts and insert the links section into the document."""
        self.emit_files(output_file)
        position = self.settings.script_links_position
        section = build_section(self.emitted, slide_format=is_slide_format(target_format), position=position)
        if section is not None:
            place_section(document, section, position)
        return document

    def run(
        self,
        document: Document,
        *,
        target_format: str | None = None,
        output_file: str | Path | None = None,
    ) -> Document:
        """Process a whole document in a single pass."""
        self.on_metadata(document.meta)
        for block in document.iter_code_blocks():
            self.on_code_block(block.language, block.text)
        return self.finish(document, target_format=target_format, output_file=output_file)
