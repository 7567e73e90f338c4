import os
from setuptools import setup


src_version = os.path.join(os.path.dirname(__file__), "aocli", "version.py")
with open(src_version) as f:
    version = f.read().strip().split()[-1][1:-1]


setup(
    name="advent-of-code-cli",
    version=version,
    description="Read, download and submit Advent of Code puzzles from your terminal",
    long_description=open("README.rst").read(),
    long_description_content_type="text/x-rst",
    packages=["aocli"],
    entry_points={
        "console_scripts": [
            "aoc=aocli.cli:main",
        ],
    },
    license="MIT",
    classifiers=[
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Environment :: Console",
        "Topic :: Games/Entertainment :: Puzzle Games",
    ],
    python_requires=">=3.9",
    install_requires=[
        "urllib3",
        "beautifulsoup4",
        "markdownify",
        "tomli-w",
        'tomli; python_version < "3.11"',
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-mock",
            "pytest-freezer",
            "pytest-raisin",
            "pook",
        ],
    },
)
