[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "zaycev-parser"
version = "0.1.0"
description = "Fetch the zaycev.net top chart, resolve MP3 links, save track lists as JSON or CSV and optionally download the files"
requires-python = ">=3.10"
keywords = ["music", "scraper", "mp3", "chart", "downloader"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP",
    "Topic :: Multimedia :: Sound/Audio",
]
dependencies = [
    "requests>=2.28",
]

[project.optional-dependencies]
test = [
    "pytest>=7.0",
    "responses>=0.23",
]

[project.scripts]
zaycev-parser = "zaycev_parser.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["zaycev_parser"]

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
