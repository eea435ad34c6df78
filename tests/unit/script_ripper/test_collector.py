import pytest

from script_ripper.collector import BlockCollector


@pytest.mark.unit
def test_collects_supported_languages_in_order() -> None:
    collector = BlockCollector()

    assert collector.on_block("python", "print(1)")
    assert collector.on_block("r", "x <- 1")
    assert collector.on_block("python", "print(2)\n")

    assert collector.languages == ["python", "r"]
    assert collector.blocks("python") == ["print(1)", "print(2)\n"]
    assert list(collector.items()) == [("python", ["print(1)", "print(2)\n"]), ("r", ["x <- 1"])]


@pytest.mark.unit
def test_unsupported_languages_are_not_retained() -> None:
    collector = BlockCollector()

    assert not collector.on_block("yaml", "a: 1")
    assert not collector.on_block(None, "plain")

    assert collector.languages == []
    assert len(collector) == 0


@pytest.mark.unit
def test_text_is_kept_verbatim() -> None:
    collector = BlockCollector()
    text = "  indented\r\n\ttab  \n\n"

    collector.on_block("bash", text)

    assert collector.blocks("bash") == [text]
