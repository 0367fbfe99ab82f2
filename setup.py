"""
Setup script for numbersense.

numbersense is the adaptive core of a mental arithmetic practice app:

1. Mastery tracking - per-skill mastery, levels and streaks
2. Scheduling - SM-2 spaced repetition and skill selection
3. Methods - ranking and worked solutions for addition/subtraction strategies

The 'numbersense' command exposes the engine from the terminal.
"""

from setuptools import find_packages, setup

setup(
    name="numbersense",
    version="1.0.0",
    description="Adaptive mental arithmetic practice engine with SM-2 scheduling",
    long_description=open("README.md", encoding="utf-8").read() if __import__("os").path.exists("README.md") else "",
    long_description_content_type="text/markdown",
    author="Numbersense",
    packages=find_packages(include=["numbersense", "numbersense.*"]),
    py_modules=["config"],
    python_requires=">=3.11",
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
            "numbersense=numbersense.cli.main:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Intended Audience :: Education",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Education",
        "Topic :: Education :: Computer Aided Instruction (CAI)",
    ],
    keywords="arithmetic mental-math spaced-repetition mastery education",
)
