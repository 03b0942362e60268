"""
Setup script for the colorpass package.

The room engine ships its SQLite schema as package data; everything
else is plain Python source.
"""

from setuptools import setup, find_packages

setup(
    name="colorpass",
    version="1.0.0",
    description="ColorPass - multiplayer card-passing game engine with SQLite rooms",
    python_requires=">=3.10",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "python-dotenv>=1.0.0",
        "pydantic>=2.5.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
        "dev": [
            "pytest>=7.0",
            "build",
            "wheel",
        ],
    },
    package_data={
        "colorpass._room": ["schema.sql"],
    },
    entry_points={
        "console_scripts": [
            "colorpass=colorpass.cli:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Games/Entertainment",
    ],
)
