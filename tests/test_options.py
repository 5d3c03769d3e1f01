import pytest

from payload_lint.errors import ErrorKind
from payload_lint.options import (
    ENV_DIRECTION,
    ENV_INCLUDE_ERRORS,
    Direction,
    ValidateOptions,
    load_options,
    should_skip,
)


def test_should_skip_runs_everything_without_allow_list():
    options = ValidateOptions()
    assert not should_skip(options, ErrorKind.ENUM_MISMATCH)


def test_should_skip_honours_allow_list():
    options = ValidateOptions(include_errors=[ErrorKind.ENUM_MISMATCH])
    assert not should_skip(options, ErrorKind.ENUM_MISMATCH)
    assert should_skip(options, ErrorKind.INVALID_TYPE)
    assert not should_skip(options, ErrorKind.INVALID_TYPE, ErrorKind.ENUM_MISMATCH)


def test_options_accept_strings():
    options = ValidateOptions(direction="Response", include_errors="enum_mismatch, INVALID_TYPE")
    assert options.direction is Direction.RESPONSE
    assert options.is_response
    assert options.include_errors == frozenset({ErrorKind.ENUM_MISMATCH, ErrorKind.INVALID_TYPE})


def test_load_options_reads_toml_and_env(tmp_path, monkeypatch):
    monkeypatch.delenv(ENV_DIRECTION, raising=False)
    monkeypatch.delenv(ENV_INCLUDE_ERRORS, raising=False)
    settings = tmp_path / "settings.toml"
    settings.write_text('[lint]\ndirection = "response"\ninclude_errors = ["SECRET_PROPERTY"]\n', encoding="utf-8")

    options = load_options(settings)
    assert options.is_response
    assert options.include_errors == frozenset({ErrorKind.SECRET_PROPERTY})

    monkeypatch.setenv(ENV_DIRECTION, "request")
    monkeypatch.setenv(ENV_INCLUDE_ERRORS, "ENUM_MISMATCH,ENUM_CASE_MISMATCH")
    overridden = load_options(settings)
    assert overridden.direction is Direction.REQUEST
    assert overridden.include_errors == frozenset({ErrorKind.ENUM_MISMATCH, ErrorKind.ENUM_CASE_MISMATCH})


def test_load_options_defaults_when_missing(tmp_path, monkeypatch):
    monkeypatch.delenv(ENV_DIRECTION, raising=False)
    monkeypatch.delenv(ENV_INCLUDE_ERRORS, raising=False)
    options = load_options(tmp_path / "absent.toml")
    assert options == ValidateOptions()


def test_load_options_rejects_unknown_values(tmp_path, monkeypatch):
    monkeypatch.delenv(ENV_DIRECTION, raising=False)
    monkeypatch.delenv(ENV_INCLUDE_ERRORS, raising=False)
    settings = tmp_path / "settings.toml"
    settings.write_text('[lint]\ninclude_errors = ["NOT_A_RULE"]\n', encoding="utf-8")
    with pytest.raises(ValueError):
        load_options(settings)
