#!/usr/bin/env python
from pathlib import Path
from setuptools import setup, find_namespace_packages

long_description = Path("README.md").read_text()

setup(
    name='osmpresets',
    version='0.1.0',
    description='osmpresets matches OpenStreetMap tags to iD-style feature presets. It scores tag patterns with wildcard keys and values, indexes presets by tag key for fast candidate lookup, searches presets by free text with country filtering, and resolves inherited preset fields along the preset hierarchy. GeoDataFrames of OSM features can be classified in one call.',
    long_description=long_description,
    long_description_content_type='text/markdown',

    packages=find_namespace_packages(include=['osmpresets', 'osmpresets.*']),
    python_requires='>=3.9',

    install_requires=[
        'pandas',
        'geopandas',
        'numpy',
        'shapely',
    ],

    extras_require={
        'test': [
            'pytest',
        ]
    },

    classifiers=[
        'Programming Language :: Python :: 3',
        'License :: OSI Approved :: MIT License',
        'Operating System :: OS Independent',
    ],
)
