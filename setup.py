#!/usr/bin/env python3
"""
sodix - Setup Script

For development installation:
    pip install -e .[dev]
"""

from setuptools import setup, find_packages
from pathlib import Path

# Read version from package
version = "0.2.0"

# Read README
readme_path = Path(__file__).parent / "README.md"
long_description = readme_path.read_text() if readme_path.exists() else ""

setup(
    name="sodix",
    version=version,
    description="libsodium compatible command-line tool for signing and encryption with hex keys",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="sodix contributors",
    license="MIT",
    
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.9",
    
    install_requires=[
        "PyNaCl>=1.5",
        "cryptography>=3.4",
        "toml>=0.10",
    ],
    
    extras_require={
        "dev": [
            "pytest>=7.0",
            "pytest-cov>=3.0",
            "black>=22.0",
            "mypy>=0.9",
        ],
        "test": [
            "pytest>=7.0",
        ],
    },
    
    entry_points={
        "console_scripts": [
            "sodix=sodix.main:main",
        ],
    },
    
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Environment :: Console",
        "Intended Audience :: Developers",
        "Intended Audience :: System Administrators",
        "Operating System :: POSIX",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Topic :: Security :: Cryptography",
        "Topic :: Utilities",
    ],
    
    keywords="libsodium nacl ed25519 curve25519 signing encryption cli hex",
)
