#!/usr/bin/env python3
"""
Setup script for maskedit
"""

from setuptools import setup, find_packages
import os
import sys

# Import the version without installing the package
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))
from maskedit.__version__ import __version__

# Read README for long_description
def read_file(filename):
    with open(os.path.join(os.path.dirname(__file__), filename), encoding='utf-8') as f:
        return f.read()

setup(
    name='maskedit',
    version=__version__,
    description='Input-masking engine for single-line text fields',
    long_description=read_file('README.md'),
    long_description_content_type='text/markdown',
    packages=find_packages(include=['maskedit', 'maskedit.*']),
    python_requires='>=3.9',
    install_requires=[
        'evdev',         # Keycodes and input events for the keyboard host
    ],
    extras_require={
        'dev': [
            'pytest>=7.0',
            'pytest-cov',
            'pytest-timeout',
        ],
    },
    entry_points={
        'console_scripts': [
            'maskedit=maskedit.cli:main',
        ],
    },
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Developers',
        'Topic :: Software Development :: Libraries',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
        'Programming Language :: Python :: 3.13',
        'Operating System :: POSIX :: Linux',
        'Topic :: Text Processing',
    ],
)
