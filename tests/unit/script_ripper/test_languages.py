import pytest

from script_ripper.languages import LANGUAGES, comment_prefix, is_script_language, lookup

REGISTRY_SIZE = 16


@pytest.mark.unit
def test_registry_has_sixteen_languages() -> None:
    assert len(LANGUAGES) == REGISTRY_SIZE
    assert {spec.extension for spec in LANGUAGES.values()} == {
        ".R", ".py", ".jl", ".sh", ".js", ".ts", ".sql", ".rs",
        ".go", ".cpp", ".c", ".java", ".scala", ".rb", ".pl", ".php",
    }


@pytest.mark.unit
def test_lookup_is_exact() -> None:
    spec = lookup("python")

    assert spec is not None
    assert spec.extension == ".py"
    assert spec.comment_prefix == "#'"
    assert lookup("Python") is None
    assert lookup("py") is None
    assert lookup(None) is None
    assert not is_script_language("yaml")


@pytest.mark.unit
@pytest.mark.parametrize(
    ("language", "prefix"),
    [("r", "#'"), ("sql", "--'"), ("java", "//'"), ("ruby", "#'"), ("haskell", "#'")],
)
def test_comment_prefix_per_language(language: str, prefix: str) -> None:
    assert comment_prefix(language) == prefix
