[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "postboard"
version = "0.1.0"
description = "A small JSON HTTP service for posts and contact messages with JPEG uploads."
requires-python = ">=3.10"
keywords = ["http", "rest", "api", "flask", "sqlalchemy", "posts", "contacts", "uploads"]
classifiers = [
    "Development Status :: 3 - Alpha",
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
]
dependencies = [
    "flask",
    "sqlalchemy",
    "python-dotenv",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
postboard = "postboard.app:main"

[tool.hatch.build.targets.wheel]
packages = ["postboard"]

[tool.pytest.ini_options]
addopts = "-ra"
