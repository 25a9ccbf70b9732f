"""Setup script for codetally"""

from setuptools import setup, find_packages
from pathlib import Path

# Read README
this_directory = Path(__file__).parent
long_description = ""
readme_path = this_directory / "README.md"
if readme_path.exists():
    long_description = readme_path.read_text(encoding="utf-8")

setup(
    name="codetally",
    version="0.1.0",
    description="Line and comment metrics for Objective-C and C sources, driven by syntax trees",
    long_description=long_description,
    long_description_content_type="text/markdown",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Topic :: Software Development :: Quality Assurance",
        "Topic :: Software Development :: Libraries :: Python Modules",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.11",
    install_requires=[
        "rich>=13.0.0",
        "typer>=0.9.0,<0.26",
        "click>=8.0.0",
    ],
    extras_require={
        "parsing": [
            "tree-sitter>=0.23.0",
            "tree-sitter-c>=0.23.0",
            "tree-sitter-objc>=3.0.0",
        ],
        "test": [
            "pytest>=7.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "codetally=codetally.cli:app",
        ],
    },
    keywords="code-metrics static-analysis objective-c lines-of-code comments",
)
