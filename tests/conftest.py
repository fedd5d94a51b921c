# Shared fixtures: config snapshot built from the repo's config/ folder.

import pytest

from concierge.knowledge import ConfigStore
from tests.fakes import CONFIG_DIR


@pytest.fixture
def config_store() -> ConfigStore:
    return ConfigStore(CONFIG_DIR.as_posix(), "main-config.yaml", "specific-config.yaml")


@pytest.fixture
def snapshot(config_store):
    return config_store.snapshot
