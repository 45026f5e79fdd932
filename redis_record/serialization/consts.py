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

# same as the default `proto-max-bulk-len` of a Redis server
DEFAULT_BYTES_MAX_LENGTH = 512 * 1024 * 1024

# a header line is `<type byte><decimal or short text>\r\n`, anything longer than this is not a header
DEFAULT_LINE_MAX_LENGTH = 64 * 1024

# maximum nesting of aggregate replies (arrays, maps, sets)
DEFAULT_MAX_DEPTH = 64
