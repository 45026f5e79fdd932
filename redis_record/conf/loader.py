#  Copyright 2025 Hathor Labs
#
#  Licensed under the Apache License, Version 2.0 (the "License");
#  you may not use this file except in compliance with the License.
#  You may obtain a copy of the License at
#
#  http://www.apache.org/licenses/LICENSE-2.0
#
#  Unless required by applicable law or agreed to in writing, software
#  distributed under the License is distributed on an "AS IS" BASIS,
#  WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#  See the License for the specific language governing permissions and
#  limitations under the License.

"""
Reading of settings files.

A settings file is a YAML mapping. It may name another file in its `extends` key, relative to its own directory, in
which case the keys of the extending file are merged on top of the extended one, nested mappings included. Chains of
files are followed until a file with no `extends` is found.
"""

from pathlib import Path
from typing import Any, Union

import yaml
from structlog import get_logger

logger = get_logger()

EXTENDS_KEY = 'extends'


def merged(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """ New dict with the keys of `override` on top of `base`, mappings present on both sides are merged recursively.

    >>> merged(dict(a=1, b=dict(c=2, d=3)), dict(b=dict(d=5), e=7))
    {'a': 1, 'b': {'c': 2, 'd': 5}, 'e': 7}
    >>> merged(dict(a=dict(b=1)), dict(a=None))
    {'a': None}
    """
    result = dict(base)
    for key, value in override.items():
        current = result.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            result[key] = merged(current, value)
        else:
            result[key] = value
    return result


def read_yaml_mapping(filepath: Union[Path, str]) -> dict[str, Any]:
    """ Contents of a YAML file that holds a mapping, an empty file is an empty mapping.
    """
    path = Path(filepath)
    if not path.is_file():
        raise ValueError(f"'{path}' is not a file")
    with path.open('r') as fp:
        contents = yaml.safe_load(fp)
    if contents is None:
        return {}
    if not isinstance(contents, dict):
        raise ValueError(f"'{path}' cannot be parsed as a mapping")
    return contents


def load_settings_dict(filepath: Union[Path, str]) -> dict[str, Any]:
    """ Contents of a settings file with its `extends` chain resolved, the `extends` key itself is removed.
    """
    chain: list[dict[str, Any]] = []
    seen: set[Path] = set()
    path: Path | None = Path(filepath)
    while path is not None:
        resolved = path.resolve()
        if resolved in seen:
            raise ValueError(f"'{path}' is extended more than once")
        seen.add(resolved)
        contents = read_yaml_mapping(path)
        base_name = contents.pop(EXTENDS_KEY, None)
        chain.append(contents)
        path = path.parent / str(base_name) if base_name else None

    logger.debug('settings file read', source=str(filepath), extended=len(chain) - 1)
    result: dict[str, Any] = {}
    for contents in reversed(chain):
        result = merged(result, contents)
    return result
