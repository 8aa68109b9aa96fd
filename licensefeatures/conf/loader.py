# Copyright 2026 Hathor Labs
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import os
from pathlib import Path
from typing import NamedTuple, Optional

from structlog import get_logger

from licensefeatures.conf.settings import CodecSettings
from licensefeatures.utils.yaml import model_from_extended_yaml

logger = get_logger()

CONFIG_YAML_ENV = 'LICENSEFEATURES_CONFIG_YAML'
DEFAULT_SETTINGS_FILEPATH = str(Path(__file__).parent / 'default.yml')


class _SettingsMetadata(NamedTuple):
    source: str
    settings: CodecSettings


_settings_singleton: Optional[_SettingsMetadata] = None


def get_settings() -> CodecSettings:
    """ Return the process-wide codec settings.

    The yaml file is taken from the environment variable 'LICENSEFEATURES_CONFIG_YAML', the packaged defaults are used
    when it is not set. The file is only read once.
    """
    source = os.environ.get(CONFIG_YAML_ENV, DEFAULT_SETTINGS_FILEPATH)
    return _load_settings_singleton(source)


def _load_settings_singleton(source: str) -> CodecSettings:
    global _settings_singleton

    if _settings_singleton is not None:
        if _settings_singleton.source != source:
            raise Exception('loading config twice with a different file')

        return _settings_singleton.settings

    settings = model_from_extended_yaml(CodecSettings, filepath=source)
    logger.debug('codec settings loaded', source=source, settings=settings.model_dump())
    _settings_singleton = _SettingsMetadata(source=source, settings=settings)

    return _settings_singleton.settings
