#!/usr/bin/env python
"""azlogin: log the Azure CLI in from CI/CD pipelines."""

from setuptools import find_packages, setup

VERSION = "1.0.0"
CLASSIFIERS = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "License :: OSI Approved :: MIT License",
]

DEPENDENCIES = [
    "knack>=0.11.0",
    "pyyaml>=6.0",
    "requests>=2.28.0",
    "rich>=13.0.0",
]

TEST_DEPENDENCIES = [
    "pytest>=7.0",
]

setup(
    name="azlogin",
    version=VERSION,
    description="Log the Azure CLI in with a service principal, OIDC federated token or managed identity",
    long_description="Drives the Azure CLI through cloud registration, login and subscription selection for CI/CD jobs.",
    license="MIT",
    author="azlogin maintainers",
    author_email="",
    classifiers=CLASSIFIERS,
    python_requires=">=3.10",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=DEPENDENCIES,
    extras_require={
        "test": TEST_DEPENDENCIES,
    },
    entry_points={
        "console_scripts": [
            "azlogin=azlogin:main",
        ]
    },
)
