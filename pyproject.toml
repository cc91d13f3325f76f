[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "textanalyzer"
version = "0.1.0"
description = "Small HTTP services that analyse plain-text files, fetch word clouds for them and keep files and word clouds in MongoDB"
requires-python = ">=3.10"
keywords = ["text analysis", "word count", "word cloud", "http service", "flask", "mongodb"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Web Environment",
    "Framework :: Flask",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
    "Topic :: Text Processing :: General",
]
dependencies = [
    "flask>=2.2",
    "requests>=2.28",
    "pymongo>=4.0",
]

[project.optional-dependencies]
test = [
    "pytest>=7.0",
    "responses>=0.23",
]

[project.scripts]
textanalyzer-analyzer = "textanalyzer.analyzer_app:main"
textanalyzer-storager = "textanalyzer.storager_app:main"
textanalyzer-router = "textanalyzer.router_app:main"
textanalyzer-core = "textanalyzer.core_app:main"

[tool.hatch.build.targets.wheel]
packages = ["textanalyzer"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
ignore_missing_imports = true
