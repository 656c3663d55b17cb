import os

import pytest

from flag_translator import main as entrypoint


def test_overrides_are_pushed_into_environment(monkeypatch):
    for key in ("TRANSLATION_PROVIDER", "LOG_LEVEL", "PORT", "STATUS_SERVER_ENABLED"):
        monkeypatch.setenv(key, "")
    calls = []
    monkeypatch.setattr("flag_translator.runner.run_flag_translator", lambda: calls.append(True))

    entrypoint.main(["--provider", "deepl", "--log-level", "debug", "--port", "8081", "--no-status"])

    assert os.environ["TRANSLATION_PROVIDER"] == "deepl"
    assert os.environ["LOG_LEVEL"] == "debug"
    assert os.environ["PORT"] == "8081"
    assert os.environ["STATUS_SERVER_ENABLED"] == "false"
    assert calls == [True]


def test_no_arguments_leave_environment_alone(monkeypatch):
    monkeypatch.setenv("TRANSLATION_PROVIDER", "mymemory")
    entrypoint.apply_overrides(entrypoint.build_parser().parse_args([]))

    assert os.environ["TRANSLATION_PROVIDER"] == "mymemory"


def test_unknown_provider_is_rejected():
    with pytest.raises(SystemExit):
        entrypoint.build_parser().parse_args(["--provider", "babelfish"])
