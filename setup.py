"""Setup configuration for goverage."""

from setuptools import setup, find_packages

setup(
    name="goverage",
    version="0.1.0",
    description="Merged Go coverage profiles across many packages",
    packages=find_packages(include=["goverage", "goverage.*"]),
    python_requires=">=3.11",
    install_requires=[
        "click>=8.1.0",
        "pyyaml>=6.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "goverage=goverage.cli:main",
        ],
    },
)
