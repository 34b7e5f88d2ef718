"""
Setup script for popquiz.

popquiz lets you write quizzes in a small plain-text format and take them
in the terminal, with automatic scoring, timed partial credit and several
question styles (short answer, flashcard, list, ordered list, multiple choice).

The 'popquiz' command is the entry point.
"""

from setuptools import find_packages, setup

setup(
    name="popquiz",
    version="1.0.0",
    description="Take pop quizzes written in plain text from the command line",
    long_description=open("README.md", encoding="utf-8").read() if __import__("os").path.exists("README.md") else "",
    long_description_content_type="text/markdown",
    packages=find_packages(include=["popquiz", "popquiz.*"]),
    python_requires=">=3.10",
    install_requires=[
        # CLI
        "typer>=0.9.0",
        "rich>=13.0.0",
        # Config & Validation
        "pydantic>=2.0.0",
        "pydantic-settings>=2.0.0",
        # Logging
        "loguru>=0.7.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "ruff>=0.1.0",
            "mypy>=1.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "popquiz=popquiz.cli:run",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Intended Audience :: Education",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Education",
        "Topic :: Education :: Testing",
    ],
    keywords="quiz flashcards cli education",
)
