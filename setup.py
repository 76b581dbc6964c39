from __future__ import annotations

from setuptools import find_packages, setup

setup(
    name="filmfinder",
    version="0.1.0",
    description="Headless movie search, details and watchlist client for the OMDb catalog.",
    # Repo convention: sources live under `backend/`, imported as `filmfinder`.
    package_dir={"": "backend"},
    packages=find_packages(where="backend", include=["filmfinder", "filmfinder.*"]),
    python_requires=">=3.10",
    install_requires=[
        "aiohttp>=3.9",
        "pydantic>=2.6,<3",
        "python-dotenv>=1.0",
        "rich>=13.0",
    ],
    extras_require={
        # unittest needs nothing extra; pytest is a convenience runner.
        "test": ["pytest>=8.0"],
    },
    entry_points={
        "console_scripts": [
            "filmfinder=filmfinder.cli.main:main",
        ],
    },
)
