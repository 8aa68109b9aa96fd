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

from copy import deepcopy
from typing import Any, TypeVar

K = TypeVar('K')


def deep_merge(base: dict[K, Any], override: dict[K, Any]) -> dict[K, Any]:
    """
    Recursively merge `override` into a copy of `base`. Nested dicts are merged key by key, any other value in
    `override` replaces the one in `base`. Both inputs are left untouched.

    >>> base = dict(legacy_framing=False, limits=dict(name=64, feature=4096))
    >>> override = dict(limits=dict(feature=8192), legacy_framing=True)
    >>> deep_merge(base, override) == dict(legacy_framing=True, limits=dict(name=64, feature=8192))
    True
    >>> base == dict(legacy_framing=False, limits=dict(name=64, feature=4096))
    True
    """
    merged = deepcopy(base)

    def merge_into(target: dict[K, Any], source: dict[K, Any]) -> None:
        for key, value in source.items():
            if isinstance(target.get(key), dict) and isinstance(value, dict):
                merge_into(target[key], value)
            else:
                target[key] = value

    merge_into(merged, override)
    return merged
