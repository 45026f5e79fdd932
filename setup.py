#!/usr/bin/env python
"""
Copyright 2025 Hathor Labs

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

   http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.
"""

import os
import re

from setuptools import find_packages, setup


def _read_base_version() -> str:
    # XXX: the package can't be imported here, its dependencies may not be installed yet
    version_file = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'redis_record', 'version.py')
    with open(version_file) as fp:
        match = re.search(r"^BASE_VERSION = '([^']+)'", fp.read(), re.MULTILINE)
    assert match is not None, 'BASE_VERSION not found'
    return match.group(1)


setup(
    name='redis-record',
    version=_read_base_version(),
    description='Record codec for Redis hashes',
    author='Hathor Team',
    author_email='contact@hathor.network',
    url='https://hathor.network/',
    license='Apache License 2.0',
    classifiers=[
        'Programming Language :: Python :: 3',
        'Operating System :: OS Independent',
        'License :: OSI Approved :: Apache Software License',
    ],
    python_requires='>=3.11',
    packages=find_packages(exclude=('redis_record_tests', 'redis_record_tests.*')),
    package_data={
        'redis_record.conf': ['*.yml'],
    },
    install_requires=[
        'structlog',
        'pydantic>=2',
        'PyYAML',
        'typing_extensions',
    ],
    extras_require={
        'test': [
            'pytest',
            'twisted',
        ],
    },
)
