import logging
from pathlib import Path

import pytest

from script_ripper import logging as ripper_logging


@pytest.mark.unit
def test_setup_logging_keeps_existing_root_handlers(monkeypatch: pytest.MonkeyPatch) -> None:
    root = logging.getLogger()
    handler = logging.NullHandler()
    monkeypatch.setattr(root, "handlers", [handler])
    monkeypatch.setattr(ripper_logging, "_LOGGING_CONFIGURED", False)

    ripper_logging.setup_logging()

    assert root.handlers == [handler]


@pytest.mark.unit
def test_setup_logging_with_file_replaces_handlers(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    root = logging.getLogger()
    handler = logging.NullHandler()
    monkeypatch.setattr(root, "handlers", [handler])

    ripper_logging.setup_logging(tmp_path / "ripper.log")

    assert handler not in root.handlers
    assert any(isinstance(h, logging.FileHandler) for h in root.handlers)
    for h in root.handlers:
        h.close()
