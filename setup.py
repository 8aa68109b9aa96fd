#!/usr/bin/env python
"""
Copyright 2026 Hathor Labs

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

import re
from pathlib import Path

from setuptools import find_packages, setup


def read_version() -> str:
    """Read the package version from source, without importing the package."""
    text = (Path(__file__).parent / 'licensefeatures' / 'version.py').read_text()
    match = re.search(r"^__version__ = '([^']+)'", text, re.MULTILINE)
    assert match is not None, 'version not found'
    return match.group(1)


setup(
    name='licensefeatures',
    version=read_version(),
    description='Typed license features with a self-describing binary encoding',
    author='Hathor Team',
    author_email='contact@hathor.network',
    license='Apache 2.0',
    classifiers=[
        'Programming Language :: Python :: 3',
        'Operating System :: OS Independent',
        'License :: OSI Approved :: Apache Software License',
    ],
    python_requires='>=3.11',
    packages=find_packages(include=('licensefeatures', 'licensefeatures.*')),
    package_data={'licensefeatures.conf': ['*.yml']},
    install_requires=[
        'pydantic>=2,<3',
        'pyyaml>=6',
        'structlog>=22',
        'typing_extensions>=4.10',
    ],
    extras_require={
        'test': ['pytest>=7'],
    },
)
