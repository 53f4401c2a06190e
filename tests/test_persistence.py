"""Tests for config file persistence helpers."""

import pytest

from ambiway.exceptions import ConfigFileInvalidError
from ambiway.models import AppConfig
from ambiway.utils import PydanticPersistence


@pytest.mark.unit
class TestReadDocument:
    """Test parsing files into dicts."""

    def test_toml(self, temp_dir):
        """TOML tables become nested dicts."""
        path = temp_dir / "a.toml"
        path.write_text("[settings]\nsize = 4\n")
        assert PydanticPersistence.read_document(path) == {"settings": {"size": 4}}

    def test_json_top_level_must_be_object(self, temp_dir):
        """A JSON list is not a config document."""
        path = temp_dir / "a.json"
        path.write_text("[1, 2]")
        with pytest.raises(ConfigFileInvalidError):
            PydanticPersistence.read_document(path)

    def test_missing(self, temp_dir):
        """Missing files raise FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            PydanticPersistence.read_document(temp_dir / "missing.toml")


@pytest.mark.unit
class TestValidateFile:
    """Test non-raising validation."""

    def test_valid(self, temp_dir):
        """A good file validates."""
        path = temp_dir / "config.toml"
        path.write_text(AppConfig.default_template())
        assert PydanticPersistence.validate_file(path, AppConfig) == (True, None)

    def test_invalid(self, temp_dir):
        """A bad file reports why."""
        path = temp_dir / "config.toml"
        path.write_text("[settings]\nsize = 0\n")
        is_valid, message = PydanticPersistence.validate_file(path, AppConfig)

        assert not is_valid
        assert message

    def test_missing(self, temp_dir):
        """A missing file is reported, not raised."""
        is_valid, message = PydanticPersistence.validate_file(temp_dir / "x.toml", AppConfig)
        assert not is_valid
        assert "not found" in message


@pytest.mark.unit
class TestWriteText:
    """Test safe writes."""

    def test_creates_parents(self, temp_dir):
        """Missing directories are created."""
        path = temp_dir / "nested" / "dir" / "config.toml"
        PydanticPersistence.write_text(path, "a = 1\n")
        assert path.read_text() == "a = 1\n"

    def test_backup_on_overwrite(self, temp_dir):
        """The previous content is kept in a .bak file."""
        path = temp_dir / "config.toml"
        path.write_text("old = 1\n")

        PydanticPersistence.write_text(path, "new = 2\n")

        assert path.read_text() == "new = 2\n"
        assert (temp_dir / "config.toml.bak").read_text() == "old = 1\n"
        assert not (temp_dir / "config.toml.tmp").exists()

    def test_no_backup(self, temp_dir):
        """Backups can be turned off."""
        path = temp_dir / "config.toml"
        path.write_text("old = 1\n")

        PydanticPersistence.write_text(path, "new = 2\n", backup=False)
        assert not (temp_dir / "config.toml.bak").exists()
