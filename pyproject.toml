[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "finanzas-hogar"
version = "0.1.0"
description = "Household finance ledger: monthly income, expenses, payments and yearly CSV files from an interactive console menu"
requires-python = ">=3.10"
dependencies = []
keywords = ["finance", "budget", "ledger", "expenses", "csv", "household"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Natural Language :: Spanish",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Financial :: Accounting",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
finanzas-hogar = "finanzas_hogar.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["finanzas_hogar"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
