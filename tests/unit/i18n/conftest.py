"""Feature-level fixtures for i18n system tests."""

import pytest
import yaml


@pytest.fixture
def temp_translations_dir(tmp_path):
    """Create temporary directory with sample YAML translation files.

    Returns a directory structure like:
    - messages.en.yml
    - messages.fr.yml
    - admin.en.yaml
    """
    en_messages = {
        "hello": "Hello",
        "greeting": {"morning": "Good morning", "evening": "Good evening"},
    }
    with open(tmp_path / "messages.en.yml", "w") as f:
        yaml.dump(en_messages, f)

    fr_messages = {
        "hello": "Bonjour",
        "greeting": {"morning": "Bon matin"},
    }
    with open(tmp_path / "messages.fr.yml", "w", encoding="utf-8") as f:
        yaml.dump(fr_messages, f, allow_unicode=True)

    with open(tmp_path / "admin.en.yaml", "w") as f:
        yaml.dump({"dashboard": "Dashboard"}, f)

    return tmp_path
