"""Tests for configuration."""
from pathlib import Path


class TestNoesisgenConfig:
    def test_defaults(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        from noesisgen.config import NoesisgenConfig
        cfg = NoesisgenConfig()
        assert cfg.indent_level == 2
        assert cfg.verbose is False
        assert cfg.types_only is False
        assert cfg.types_module == "NoesisTypes"
        assert cfg.image_module == "horizon/ui"
        assert cfg.default_font == "Bangers"
        assert cfg.data_context_name == "dataContext"
        assert cfg.log_level == "INFO"

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("NOESISGEN_INDENT_LEVEL", "4")
        monkeypatch.setenv("NOESISGEN_DEFAULT_FONT", "Roboto")
        monkeypatch.setenv("NOESISGEN_TYPES_ONLY", "true")
        from noesisgen.config import NoesisgenConfig
        cfg = NoesisgenConfig()
        assert cfg.indent_level == 4
        assert cfg.default_font == "Roboto"
        assert cfg.types_only is True

    def test_derived_paths(self, tmp_path):
        from noesisgen.config import NoesisgenConfig
        cfg = NoesisgenConfig(home_dir=tmp_path / "home")
        project = Path("/work/game")
        assert cfg.data_dir(project) == project / ".noesis" / "data"
        assert cfg.structures_dir(project) == project / ".noesis" / "data" / "structures"
        assert cfg.sets_dir(project) == project / ".noesis" / "data" / "sets"
        assert cfg.log_dir == tmp_path / "home" / "logs"

    def test_custom_layout(self):
        from noesisgen.config import NoesisgenConfig
        cfg = NoesisgenConfig(data_subdir="content", sets_dirname="data")
        assert cfg.sets_dir(Path("p")) == Path("p") / "content" / "data"

    def test_get_config_singleton(self):
        from noesisgen.config import get_config
        assert get_config() is get_config()
