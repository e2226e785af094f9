"""Contains unit tests for the synchronize content module."""

from pathlib import Path

import pytest

from github_artifact_sync.exceptions import ConfigError
from github_artifact_sync.synchronize.content import replace_directory_contents, resolve_destination


def tree(root: Path) -> dict[str, str]:
    """Map relative file paths to contents, skipping the git directory."""
    return {
        str(path.relative_to(root)): path.read_text()
        for path in sorted(root.rglob("*"))
        if path.is_file() and ".git" not in path.relative_to(root).parts
    }


@pytest.fixture
def working_tree(tmp_path: Path) -> Path:
    root = tmp_path / "clone"
    (root / ".git").mkdir(parents=True)
    (root / ".git" / "HEAD").write_text("ref: refs/heads/develop\n")
    (root / "README.md").write_text("readme\n")
    (root / "artifacts" / "old").mkdir(parents=True)
    (root / "artifacts" / "old" / "stale.txt").write_text("stale\n")
    (root / "artifacts" / "a.txt").write_text("previous a\n")
    return root


@pytest.fixture
def source(tmp_path: Path) -> Path:
    root = tmp_path / "input"
    (root / "nested").mkdir(parents=True)
    (root / "a.txt").write_text("a\n")
    (root / "nested" / "b.txt").write_text("b\n")
    (root / ".git").mkdir()
    (root / ".git" / "config").write_text("[core]\n")
    return root


def test_destination_mirrors_input(working_tree: Path, source: Path) -> None:
    """Test that the destination ends up exactly equal to the input, with stale files gone."""
    replace_directory_contents(source, working_tree, "artifacts")
    assert tree(working_tree / "artifacts") == {"a.txt": "a\n", "nested/b.txt": "b\n"}


def test_content_outside_destination_is_untouched(working_tree: Path, source: Path) -> None:
    """Test that files outside the destination subdirectory are kept."""
    replace_directory_contents(source, working_tree, "artifacts")
    assert (working_tree / "README.md").read_text() == "readme\n"
    assert (working_tree / ".git" / "HEAD").exists()


def test_missing_intermediate_directories_are_created(working_tree: Path, source: Path) -> None:
    """Test that a destination that does not exist yet is created with its parents."""
    target = replace_directory_contents(source, working_tree, "deep/new/place")
    assert target == (working_tree / "deep" / "new" / "place").resolve()
    assert tree(target) == {"a.txt": "a\n", "nested/b.txt": "b\n"}


def test_repository_root_destination_keeps_git_directory(working_tree: Path, source: Path) -> None:
    """Test that syncing into the root replaces everything except the git directory."""
    replace_directory_contents(source, working_tree, ".")
    assert tree(working_tree) == {"a.txt": "a\n", "nested/b.txt": "b\n"}
    assert (working_tree / ".git" / "HEAD").read_text() == "ref: refs/heads/develop\n"
    assert not (working_tree / ".git" / "config").exists()


def test_destination_file_is_replaced_by_directory(working_tree: Path, source: Path) -> None:
    """Test that a file at the destination path is replaced by the mirrored directory."""
    replace_directory_contents(source, working_tree, "README.md")
    assert (working_tree / "README.md").is_dir()


def test_empty_input_empties_destination(working_tree: Path, tmp_path: Path) -> None:
    """Test that an empty input leaves an empty destination."""
    empty = tmp_path / "empty"
    empty.mkdir()
    replace_directory_contents(empty, working_tree, "artifacts")
    assert tree(working_tree / "artifacts") == {}


@pytest.mark.parametrize(
    "destination",
    [
        pytest.param("../outside", id="parent"),
        pytest.param("artifacts/../../outside", id="nested parent"),
        pytest.param(".git", id="git directory"),
        pytest.param(".git/hooks", id="inside git directory"),
    ],
)
def test_destination_must_stay_in_working_tree(working_tree: Path, destination: str) -> None:
    """Test that destinations escaping the working tree or hitting git metadata are rejected."""
    with pytest.raises(ConfigError):
        resolve_destination(working_tree, destination)


def test_missing_input_directory(working_tree: Path, tmp_path: Path) -> None:
    """Test that a missing input directory is a configuration error and nothing is removed."""
    with pytest.raises(ConfigError, match="is not a directory"):
        replace_directory_contents(tmp_path / "missing", working_tree, "artifacts")
    assert (working_tree / "artifacts" / "old" / "stale.txt").exists()
