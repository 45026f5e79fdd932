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

from importlib.metadata import PackageNotFoundError, version

BASE_VERSION = '0.4.0'

DISTRIBUTION_NAME = 'redis-record'

# appended to BASE_VERSION when the package is used from a source tree that was never installed
LOCAL_VERSION_SUFFIX = '+local'


def _get_version() -> str:
    """Get the installed version of the distribution, or the base version with a local suffix if it isn't installed.

    :return: The current redis-record version
    """
    try:
        return version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        return BASE_VERSION + LOCAL_VERSION_SUFFIX


__version__ = _get_version()
