[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "browsers"
version = "0.7.0"
description = "URL rule matching, Slack deep links, configuration and profile discovery for a browser picker"
requires-python = ">=3.10"
dependencies = [
    "pillow",
]
keywords = ["browser", "browser-picker", "url-rules", "glob", "slack", "profiles"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: End Users/Desktop",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: Browsers",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["browsers"]

[tool.pytest.ini_options]
addopts = "-ra"
