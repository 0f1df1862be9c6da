[build-system]
requires = ["setuptools>=61"]
build-backend = "setuptools.build_meta"

[project]
name = "apirule"
version = "0.1.0"
description = "APIRule resource models, version conversion and reconciliation helpers for an API gateway controller"
requires-python = ">=3.10"
dependencies = []
keywords = ["apirule", "api-gateway", "kubernetes", "istio", "oathkeeper", "jwt"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.setuptools]
packages = ["apirule"]

[tool.pytest.ini_options]
addopts = "-ra"
