"""
Setup script for Microgrid Ledger
"""

from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

with open("requirements.txt", "r", encoding="utf-8") as fh:
    requirements = [line.strip() for line in fh if line.strip() and not line.startswith("#")]

setup(
    name="microgrid-ledger",
    version="1.0.0",
    description="Single-ledger accounting engine for peer-to-peer energy trading in a microgrid",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["microgrid_ledger", "microgrid_ledger.*"]),
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Topic :: Software Development :: Libraries :: Python Modules",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.10",
    install_requires=requirements,
    extras_require={
        "test": ["pytest>=7.0", "httpx>=0.24"],
    },
    entry_points={
        "console_scripts": [
            "microgrid-ledger-api=microgrid_ledger.api:main",
        ],
    },
)
