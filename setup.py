"""
Setup script for canvas-tui.

canvas-tui is a terminal viewer for upcoming Canvas assignments:

1. Fetches the planner for the authenticated user
2. Buckets assignments by due date
3. Pages through the days with vim-style keys and opens assignments in a browser

The 'canvas-tui' command is the entry point.
"""

from setuptools import find_packages, setup

setup(
    name="canvas-tui",
    version="0.1.0",
    description="Terminal viewer for upcoming Canvas assignments",
    long_description=open("README.md", encoding="utf-8").read() if __import__("os").path.exists("README.md") else "",
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.10",
    install_requires=[
        # CLI
        "typer>=0.9.0",
        "rich>=13.0.0",
        # Terminal UI
        "asciimatics>=1.15.0",
        # Config & Validation
        "pydantic>=2.0.0",
        "pydantic-settings>=2.0.0",
        # HTTP
        "httpx>=0.25.0",
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
            "canvas-tui=canvastui.cli:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console :: Curses",
        "Intended Audience :: Education",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Education",
    ],
    keywords="canvas lms assignments tui cli",
)
