import pytest


@pytest.fixture(autouse=True)
def isolate_home_config(tmp_path, monkeypatch):
    """Point the user configuration directory at an empty temporary one.

    Tests must not pick up a real ``~/.config/git-auto-commit/config.toml``.
    Tests that need a specific directory patch ``_get_config_directory``
    themselves, which takes precedence over this fixture.
    """
    config_dir = tmp_path / "git-auto-commit-config"
    monkeypatch.setattr(
        "git_auto_commit.config.loader._get_config_directory", lambda: config_dir
    )
    yield config_dir
