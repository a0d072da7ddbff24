"""Setup script for the metric ingestion package."""

from setuptools import setup, find_packages

setup(
    name="tsdb-ingest",
    version="0.1.0",
    packages=find_packages(include=["tsdb_ingest", "tsdb_ingest.*"]),
    install_requires=[
        "pandas>=2.0.0",
        "pydantic>=2.5.2",
        "duckdb>=0.9.0",
        "structlog>=23.1.0",
        "rich>=13.0.0",
        "dynaconf>=3.2.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.4.4",
            "pytest-cov>=4.1.0",
            "black>=24.1.1",
            "isort>=5.13.2",
            "mypy>=1.8.0",
            "pylint>=3.0.3",
        ],
    },
    entry_points={
        "console_scripts": [
            "tsdb-ingest=tsdb_ingest.cli:main",
        ],
    },
    python_requires=">=3.9",
)
