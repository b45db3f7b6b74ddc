#!/usr/bin/env python3
"""
Setup script for the platform CLI.
Installs the command-line client and the SDK it is built on.
"""

from setuptools import setup, find_packages

setup(
    name="platform-manager-cli",
    version="0.1.0",
    description="Command-line client for the platform management API",
    packages=find_packages(
        include=[
            "platform_manager_client",
            "platform_manager_client.*",
            "platform_manager_sdk",
            "platform_manager_sdk.*",
        ]
    ),
    python_requires=">=3.9",
    install_requires=[
        "requests>=2.31",
        "pydantic>=2.0",
        "pyyaml>=6.0",
        "tabulate>=0.9",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "platform=platform_manager_client.main:main",
        ],
    },
)
