#!/usr/bin/env python
"""
Copyright 2019 Hathor Labs

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

from setuptools import find_packages, setup

from protowire.version import __version__

install_requires = [
    'pydantic>=2.0',
    'PyYAML',
    'structlog',
    'typing_extensions>=4.4',
]

setup(
    name='protowire',
    version=__version__,
    description='Protocol buffers wire format primitives and well-known types JSON mapping',
    author='Hathor Team',
    author_email='contact@hathor.network',
    url='https://hathor.network/',
    license='Apache-2.0',
    python_requires='>=3.10',
    classifiers=[
        'Programming Language :: Python :: 3',
        'Operating System :: OS Independent',
        'License :: OSI Approved :: Apache Software License',
    ],
    packages=find_packages(include=('protowire', 'protowire.*')),
    install_requires=install_requires,
    extras_require={
        'test': ['pytest'],
    },
)
