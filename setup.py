from __future__ import annotations

from setuptools import find_packages, setup


setup(
    name="trxpub",
    version="0.1.0",
    description="Publish TRX test results to Microsoft Test Manager suites through tcm.exe",
    packages=find_packages(include=["trxpub", "trxpub.*"]),
    python_requires=">=3.10",
    install_requires=[
        "PyYAML>=6.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "trxpub=trxpub.cli.trxpub:main",
        ],
    },
)
