#!/usr/bin/env python3

from setuptools import setup, find_packages

setup(
    name="sol",
    version="1.0.0",
    description="Node.js version manager with a traversal-safe tarball extractor",
    author="JustAmply",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.8",
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': [
            'sol=sol.cli:main',
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Topic :: Software Development :: Build Tools",
        "Topic :: System :: Archiving",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
)
