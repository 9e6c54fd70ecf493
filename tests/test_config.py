from pathlib import Path

import pytest

from appctl.config import CONFIG_FILENAME, Config, find_config, parse_config
from appctl.constants import DEFAULT_MAX_VISIBLE, MODE_BROWSE, MODE_SEARCH

FULL_CONFIG = """
[appctl]
mode = "search"
max_visible = 5
show_icons = false

[appctl.icons]
Ghostty = "G"
"""


@pytest.fixture
def home(tmp_path: Path, monkeypatch) -> Path:
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setattr(Path, "home", lambda: home)
    return home


@pytest.fixture
def project(tmp_path: Path) -> Path:
    project = tmp_path / "work" / "project"
    project.mkdir(parents=True)
    return project


# ---------------------------------------------------------------------------
# find_config
# ---------------------------------------------------------------------------


class TestFindConfig:
    def test_in_cwd(self, project: Path, home: Path):
        (project / CONFIG_FILENAME).write_text("")
        assert find_config(project) == project / CONFIG_FILENAME

    def test_in_parent(self, project: Path, home: Path):
        (project.parent / CONFIG_FILENAME).write_text("")
        assert find_config(project) == project.parent / CONFIG_FILENAME

    def test_cwd_wins_over_home(self, project: Path, home: Path):
        (project / CONFIG_FILENAME).write_text("")
        (home / CONFIG_FILENAME).write_text("")
        assert find_config(project) == project / CONFIG_FILENAME

    def test_falls_back_to_home(self, project: Path, home: Path):
        (home / CONFIG_FILENAME).write_text("")
        assert find_config(project) == home / CONFIG_FILENAME

    def test_explicit_home(self, project: Path, tmp_path: Path):
        other = tmp_path / "other-home"
        other.mkdir()
        (other / CONFIG_FILENAME).write_text("")
        assert find_config(project, home=other) == other / CONFIG_FILENAME

    def test_not_found(self, project: Path, home: Path):
        assert find_config(project) is None


# ---------------------------------------------------------------------------
# parse_config
# ---------------------------------------------------------------------------


class TestParseConfig:
    def test_reads_section(self, tmp_path: Path):
        path = tmp_path / CONFIG_FILENAME
        path.write_text(FULL_CONFIG)
        data = parse_config(path)
        assert data["mode"] == "search"
        assert data["icons"] == {"Ghostty": "G"}

    def test_missing_section(self, tmp_path: Path):
        path = tmp_path / CONFIG_FILENAME
        path.write_text("[other]\nkey = 1\n")
        assert parse_config(path) == {}

    def test_unknown_option(self, tmp_path: Path):
        path = tmp_path / CONFIG_FILENAME
        path.write_text("[appctl]\ncolour = 'red'\n")
        with pytest.raises(SystemExit, match="Unrecognized option: colour"):
            parse_config(path)

    def test_invalid_toml(self, tmp_path: Path):
        path = tmp_path / CONFIG_FILENAME
        path.write_text("[appctl\n")
        with pytest.raises(SystemExit, match="Error parsing"):
            parse_config(path)


# ---------------------------------------------------------------------------
# Config.create
# ---------------------------------------------------------------------------


class TestConfigCreate:
    def test_defaults(self, project: Path, home: Path):
        config = Config.create(project)
        assert config.path == project
        assert config.mode == MODE_BROWSE
        assert config.max_visible == DEFAULT_MAX_VISIBLE
        assert config.show_icons is True
        assert config.icons == {}

    def test_from_file(self, project: Path, home: Path):
        (project / CONFIG_FILENAME).write_text(FULL_CONFIG)
        config = Config.create(project)
        assert config.mode == MODE_SEARCH
        assert config.max_visible == 5
        assert config.show_icons is False
        assert config.icons == {"Ghostty": "G"}

    def test_overrides_win_over_file(self, project: Path, home: Path):
        (project / CONFIG_FILENAME).write_text(FULL_CONFIG)
        config = Config.create(project, {"mode": MODE_BROWSE, "max_visible": 8})
        assert config.mode == MODE_BROWSE
        assert config.max_visible == 8

    def test_none_overrides_are_ignored(self, project: Path, home: Path):
        (project / CONFIG_FILENAME).write_text(FULL_CONFIG)
        config = Config.create(project, {"mode": None, "show_icons": None})
        assert config.mode == MODE_SEARCH
        assert config.show_icons is False

    def test_invalid_mode(self, project: Path, home: Path):
        with pytest.raises(SystemExit, match="Invalid mode"):
            Config.create(project, {"mode": "fancy"})

    @pytest.mark.parametrize("value", [0, -3, "ten", True])
    def test_invalid_max_visible(self, project: Path, home: Path, value):
        with pytest.raises(SystemExit, match="Invalid max_visible"):
            Config.create(project, {"max_visible": value})

    def test_invalid_icons(self, project: Path, home: Path):
        (project / CONFIG_FILENAME).write_text('[appctl]\nicons = "all"\n')
        with pytest.raises(SystemExit, match="Invalid icons"):
            Config.create(project)
