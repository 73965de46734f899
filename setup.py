#!/usr/bin/env python3
"""
Setup script for nuget-promote package.
"""

from setuptools import setup, find_packages
import os


# Read the README file for long description
def read_readme():
    """Read the README file."""
    readme_path = os.path.join(os.path.dirname(__file__), "README.md")
    if os.path.exists(readme_path):
        with open(readme_path, "r", encoding="utf-8") as f:
            return f.read()
    return "nuget-promote - Promote NuGet packages and their dependencies between feeds"


setup(
    name="nuget-promote",
    version="1.0.0",
    description="Promote NuGet packages and their dependencies from one feed to another",
    long_description=read_readme(),
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.12",
        "Topic :: Software Development :: Build Tools",
        "Topic :: System :: Software Distribution",
    ],
    python_requires=">=3.11",
    install_requires=[
        "httpx>=0.24.0",
        "pydantic>=2.0.0",
        "click>=8.0.0",
        "PyYAML>=6.0",
        "semantic-version>=2.10",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0",
            "pytest-cov>=2.0",
            "pytest-mock>=3.6",
            "pytest-asyncio>=0.21",
            "respx>=0.20.0",
            "diff-cover>=7.0",
            "black>=21.0",
            "flake8>=3.8",
            "mypy>=0.800",
            "pylint>=2.8",
            "pre-commit>=3.0.0",
            "types-PyYAML",
            "setuptools>=45",
            "wheel",
            "setuptools-scm[toml]>=6.2",
            "sphinx>=4.0",
            "sphinx-rtd-theme>=1.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "nuget-promote=nuget_promote.cli:main",
        ],
    },
    include_package_data=True,
    zip_safe=False,
)
