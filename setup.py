#!/usr/bin/env python3
"""
Setup configuration for spot-reverser
Keeps a Spotify playlist in newest-added-first order on an hourly schedule
"""

from setuptools import setup, find_packages

# Read README for long description
with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

# Core requirements (always installed)
core_requirements = [
    "requests>=2.31.0",
    "python-dotenv>=1.0.0",
    "pyyaml>=6.0.1",
    "croniter>=2.0.1",
    "click>=8.1.7",
    "rich-click>=1.7.0",
    "tqdm>=4.66.1",
]

setup(
    name="spot-reverser",
    version="0.1.0",
    author="spot-reverser",
    description="Mirror a Spotify playlist into another one, newest-added first, every hour",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Intended Audience :: End Users/Desktop",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Multimedia :: Sound/Audio",
        "Topic :: Internet :: WWW/HTTP",
    ],
    python_requires=">=3.10",
    install_requires=core_requirements,
    extras_require={
        "dev": [
            "pytest>=7.4.3",
            "black>=23.11.0",
            "flake8>=6.1.0",
            "mypy>=1.7.0",
            "types-requests",
            "types-PyYAML",
        ],
    },
    keywords="spotify playlist reverse cron sync cli",
    entry_points={
        "console_scripts": [
            "spotrev=spot_reverser.cli:main",
        ],
    },
)
