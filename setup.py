#!/usr/bin/env python3
"""Setup script for daa-sdk package."""

import os

from setuptools import find_packages, setup

# Read the contents of README file
this_directory = os.path.abspath(os.path.dirname(__file__))
with open(os.path.join(this_directory, "README.md"), encoding="utf-8") as f:
    long_description = f.read()

# Core dependencies (production)
install_requires = [
    "psutil>=5.9.0",
    "PyYAML>=6.0",
    "prometheus-client>=0.19.0",
    "structlog>=23.2.0",
]

# Test dependencies
test_requires = [
    "pytest>=7.4.0",
    "pytest-asyncio>=0.21.0",
]

# Development dependencies
dev_requires = test_requires + [
    "black==24.1.1",
    "flake8==7.0.0",
    "mypy==1.8.0",
    "isort==5.13.2",
    "types-PyYAML==6.0.12.12",
    "types-psutil",
    "pre-commit==3.6.0",
    "pylint==3.3.7",
]

setup(
    name="daa-sdk",
    version="0.1.0",
    author="DAA Team",
    author_email="",
    description="Runtime detection and loading of native or portable DAA bindings",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="",
    packages=find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3.11",
        "Topic :: Software Development :: Libraries :: Python Modules",
    ],
    python_requires=">=3.11",
    install_requires=install_requires,
    extras_require={
        "test": test_requires,
        "dev": dev_requires,
    },
    include_package_data=True,
    package_data={
        "daa_sdk": ["*.yaml", "*.yml", "*.json"],
    },
    entry_points={
        "console_scripts": [
            "daa-sdk=daa_sdk.cli:main",
        ],
    },
    zip_safe=False,
)
