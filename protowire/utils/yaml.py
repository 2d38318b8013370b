# Copyright 2025 Hathor Labs
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

from pathlib import Path
from typing import Any, Union

import yaml


def dict_from_yaml(*, filepath: Union[Path, str]) -> dict[str, Any]:
    """Read a yaml mapping from `filepath`, an empty file reads as an empty mapping.

    Raises ValueError when the file does not exist, is not valid yaml or does not hold a mapping with string keys.
    """
    path = Path(filepath)
    if not path.is_file():
        raise ValueError(f"'{path}' is not a file")

    try:
        contents = yaml.safe_load(path.read_text())
    except yaml.YAMLError as e:
        raise ValueError(f"'{path}' is not valid yaml") from e

    if contents is None:
        return {}

    if not isinstance(contents, dict) or not all(isinstance(key, str) for key in contents):
        raise ValueError(f"'{path}' cannot be parsed as a dictionary of settings")

    return contents
