from __future__ import annotations

from pathlib import Path
from typing import Self

import pytest
from pydantic import field_validator, model_validator
from pydantic_settings import SettingsConfigDict

from ole_ils.core.config import CannotLoadConfiguration
from ole_ils.service.configuration.service_configuration import (
    ServiceConfiguration,
)


class MockServiceConfiguration(ServiceConfiguration):
    @field_validator("string_with_default")
    @classmethod
    def cannot_be_xyz(cls, v: str) -> str:
        if v == "xyz":
            raise ValueError("Must not be xyz!")
        return v

    @model_validator(mode="after")
    def strings_not_same(self) -> Self:
        if self.string_with_default == self.string_without_default:
            raise ValueError("strings must not be the same")
        return self

    string_with_default: str = "default"
    string_without_default: str
    int_type: int = 12

    model_config = SettingsConfigDict(env_prefix="MOCK_")


@pytest.fixture
def empty_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    for key in (
        "MOCK_STRING_WITHOUT_DEFAULT",
        "MOCK_STRING_WITH_DEFAULT",
        "MOCK_INT_TYPE",
    ):
        monkeypatch.delenv(key, raising=False)
    # .env is read from the working directory.
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.mark.usefixtures("empty_environment")
class TestServiceConfiguration:
    def test_set_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MOCK_STRING_WITHOUT_DEFAULT", "  string  ")
        monkeypatch.setenv("MOCK_INT_TYPE", "42")
        config = MockServiceConfiguration()
        # Whitespace is stripped.
        assert config.string_without_default == "string"
        assert config.string_with_default == "default"
        assert config.int_type == 42

    def test_set_from_dot_env(self, empty_environment: Path) -> None:
        (empty_environment / ".env").write_text(
            "MOCK_STRING_WITHOUT_DEFAULT=from file\n"
        )
        config = MockServiceConfiguration()
        assert config.string_without_default == "from file"

    def test_frozen(self) -> None:
        config = MockServiceConfiguration(string_without_default="string")
        with pytest.raises(ValueError):
            config.int_type = 1  # type: ignore[misc]

    def test_missing(self) -> None:
        with pytest.raises(CannotLoadConfiguration) as exc_info:
            MockServiceConfiguration()
        assert "MOCK_STRING_WITHOUT_DEFAULT:  Field required" in str(exc_info.value)

    def test_exception_validator(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MOCK_STRING_WITHOUT_DEFAULT", "string")
        monkeypatch.setenv("MOCK_STRING_WITH_DEFAULT", "xyz")
        with pytest.raises(CannotLoadConfiguration) as exc_info:
            MockServiceConfiguration()
        assert "MOCK_STRING_WITH_DEFAULT:  Value error, Must not be xyz!" in str(
            exc_info.value
        )

    def test_exception_model_validator(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MOCK_STRING_WITHOUT_DEFAULT", "same")
        monkeypatch.setenv("MOCK_STRING_WITH_DEFAULT", "same")
        with pytest.raises(CannotLoadConfiguration) as exc_info:
            MockServiceConfiguration()
        assert "Value error, strings must not be the same" in str(exc_info.value)
