# setup.py
from __future__ import annotations

from pathlib import Path

from setuptools import find_packages, setup

README = Path(__file__).with_name("README.md")
long_description = README.read_text(encoding="utf-8") if README.exists() else ""
PACKAGE_NAME = "kmerprofile"

install_requires = [
    "numpy>=1.24",
    "pandas>=2.0",

    "typer>=0.9",
    "rich>=13.0",
    "appdirs>=1.4.4",
]

extras_require = {
    "parquet": [
        "pyarrow>=14.0.0; platform_python_implementation!='PyPy'",
        "fastparquet>=2024.5.0",
    ],
    "bio": [
        "biopython>=1.80",
    ],
    "tests": [
        "pytest>=8.4.1",
        "pytest-cov>=5.0.0",
    ],
    "dev": [
        "black>=24.3.0",
        "ruff>=0.4.0",
        "mypy>=1.8.0",
        "build>=1.0.0",
        "twine>=5.0.0",
    ],
}

# convenience meta-group
extras_require["all"] = sorted({dep for group in ("parquet", "bio") for dep in extras_require[group]})

setup(
    name=PACKAGE_NAME,
    version="0.1.0",
    author="Kren AI Lab",
    author_email="krenai@umag.cl",
    description="K-mer frequency profiles: building, normalization, rank distance and persistence.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    license="GPL-3.0-only",
    packages=find_packages(exclude=("tests", "tests.*", "docs", "examples")),
    include_package_data=True,
    python_requires=">=3.10",
    install_requires=install_requires,
    extras_require=extras_require,
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Science/Research",
        "Topic :: Scientific/Engineering :: Bio-Informatics",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3 :: Only",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "License :: OSI Approved :: GNU General Public License v3 (GPLv3)",
        "Operating System :: OS Independent",
    ],
    keywords=["bioinformatics", "k-mers", "profiles", "rank distance", "genomics"],
    entry_points={
        "console_scripts": [
            "kmerprofile=kmerprofile.cli.main:app",
        ],
    },
    zip_safe=False,
)
