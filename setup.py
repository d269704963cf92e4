from pathlib import Path

from setuptools import setup, find_packages

_version = {}
exec(Path(__file__).parent.joinpath("src", "linelog", "_version.py")
     .read_text(encoding="utf-8"), _version)

setup(
    name="linelog",
    version=_version["PIP_VERSION"],
    description="Minimal embeddable logging front-end — bounded, decorated lines to a pluggable sink",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    install_requires=[],
    extras_require={
        "dev": ["pytest>=7", "pytest-cov"],
    },
    entry_points={
        "console_scripts": ["linelog=linelog.cli:main"],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Topic :: System :: Logging",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.10",
)
