"""Pytest configuration and shared fixtures."""

import pytest


@pytest.fixture(autouse=True)
def clean_convoy_env(monkeypatch, tmp_path):
    """Isolate tests from CONVOY_* variables and any local .env file."""
    import os
    for key in list(os.environ):
        if key.startswith("CONVOY_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)

    import logging
    convoy_logger = logging.getLogger("convoy")
    level = convoy_logger.level
    yield
    convoy_logger.setLevel(level)


@pytest.fixture
def templates():
    """Templates loaded from the bundled directory."""
    from convoy.templates import Templates
    return Templates()


@pytest.fixture
def template_dir(tmp_path):
    """A minimal custom template directory."""
    base = tmp_path / "custom_templates"
    (base / "roles").mkdir(parents=True)
    (base / "messages").mkdir(parents=True)
    (base / "roles" / "mayor.md.j2").write_text("Custom mayor of {{ town_root }}\n")
    (base / "messages" / "nudge.md.j2").write_text("Poke {{ polecat }}: {{ reason }}\n")
    return base
