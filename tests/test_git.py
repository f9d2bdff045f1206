import shutil
import subprocess
from pathlib import Path

import pytest

from memory_cultivation.errors import GitCommandError
from memory_cultivation.git import GitClient

pytestmark = pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")


def _repo(tmp_path: Path) -> Path:
    subprocess.run(["git", "init", "-q", "-b", "feature/x"], cwd=tmp_path, check=True)
    subprocess.run(["git", "config", "user.email", "dev@example.com"], cwd=tmp_path, check=True)
    subprocess.run(["git", "config", "user.name", "Dev"], cwd=tmp_path, check=True)
    subprocess.run(["git", "config", "commit.gpgsign", "false"], cwd=tmp_path, check=True)
    (tmp_path / "seed.txt").write_text("seed\n", encoding="utf-8")
    subprocess.run(["git", "add", "seed.txt"], cwd=tmp_path, check=True)
    subprocess.run(["git", "commit", "-q", "-m", "seed"], cwd=tmp_path, check=True)
    return tmp_path


def test_branch_staged_files_and_diff_excludes_markdown(tmp_path: Path) -> None:
    repo = _repo(tmp_path)
    (repo / "app.py").write_text("print('hi')\n", encoding="utf-8")
    (repo / "notes.md").write_text("# notes\n", encoding="utf-8")
    subprocess.run(["git", "add", "app.py", "notes.md"], cwd=repo, check=True)

    git = GitClient(cwd=repo)

    assert git.current_branch() == "feature/x"
    assert sorted(git.staged_files()) == ["app.py", "notes.md"]
    diff = git.staged_diff()
    assert "app.py" in diff
    assert "notes.md" not in diff


def test_stage_and_commit_records_deletions(tmp_path: Path) -> None:
    repo = _repo(tmp_path)
    memory_dir = repo / ".memory"
    memory_dir.mkdir()
    (memory_dir / "a.md").write_text("a", encoding="utf-8")
    subprocess.run(["git", "add", ".memory"], cwd=repo, check=True)
    subprocess.run(["git", "commit", "-q", "-m", "add memory"], cwd=repo, check=True)
    (memory_dir / "a.md").unlink()

    GitClient(cwd=repo).stage_and_commit([".memory"], "chore: clean up memory files after cultivation")

    log = subprocess.run(["git", "log", "-1", "--format=%s"], cwd=repo, check=True, capture_output=True, text=True)
    assert log.stdout.strip() == "chore: clean up memory files after cultivation"
    tracked = subprocess.run(["git", "ls-files"], cwd=repo, check=True, capture_output=True, text=True)
    assert ".memory/a.md" not in tracked.stdout


def test_failure_raises_git_command_error(tmp_path: Path) -> None:
    with pytest.raises(GitCommandError) as excinfo:
        GitClient(cwd=tmp_path).current_branch()
    assert excinfo.value.returncode != 0
