import os
from typing import Iterator

import pytest

from licensefeatures.conf import loader

os.environ[loader.CONFIG_YAML_ENV] = os.environ.get('LICENSEFEATURES_TEST_CONFIG_YAML',
                                                    loader.DEFAULT_SETTINGS_FILEPATH)


@pytest.fixture(autouse=True)
def fresh_settings() -> Iterator[None]:
    # settings are a process-wide singleton, each test may point them to another file
    loader._settings_singleton = None
    yield
    loader._settings_singleton = None
