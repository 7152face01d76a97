"""
setup.py for mazebrain
---------------------------------
Why this exists
- Provides packaging metadata and dependencies so the package can be
  installed and imported by the maze simulation and population tooling.

How it works
- Uses setuptools to discover packages and declare runtime/dev extras.
"""

from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="mazebrain",
    version="0.1.0",
    description="Genome-encoded Hebbian neural controllers for maze-running bugs",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*", "examples", "examples.*"]),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Science/Research",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Scientific/Engineering :: Artificial Intelligence",
    ],
    python_requires=">=3.10",
    install_requires=[
        "numpy>=1.21.0",
        "tqdm>=4.65.0",
    ],
    extras_require={
        "dev": [
            "black>=22.3.0",
            "isort>=5.10.1",
            "flake8>=4.0.1",
            "mypy>=0.942",
            "pytest>=7.1.2",
            "pytest-cov>=3.0.0",
            "pre-commit>=2.19.0",
        ],
    },
)
