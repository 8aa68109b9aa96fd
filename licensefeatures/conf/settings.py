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

from typing import Optional

from pydantic import BaseModel, ConfigDict, PositiveInt


class CodecSettings(BaseModel):
    """Configuration of the feature codec.

    Unknown keys are rejected and instances are immutable once loaded.
    """
    model_config = ConfigDict(extra='forbid', frozen=True)

    # Reproduce the older byte layout, which reserves the payload length word for every
    # kind: fixed-width features end with 4 zero bytes and decoding always needs at least 12 bytes.
    legacy_framing: bool = False

    # Maximum size in bytes of a whole encoded feature, None means unbounded.
    max_feature_size: Optional[PositiveInt] = None

    # Maximum size in bytes of the UTF-8 encoded feature name, None means unbounded.
    max_name_length: Optional[PositiveInt] = None
