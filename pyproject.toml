[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pixiu-backends"
version = "0.1.0"
description = "In-memory sample backends for testing an API gateway: a user store and provider, a JSON user endpoint and versioned traffic servers"
requires-python = ">=3.10"
dependencies = []
keywords = ["gateway", "backend", "sample", "testing", "http", "canary"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
    "Topic :: Software Development :: Testing",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
pixiu-provider = "pixiu_backends.apps:main"
pixiu-http-user = "pixiu_backends.httpuser:main"
pixiu-traffic = "pixiu_backends.traffic:main"

[tool.hatch.build.targets.wheel]
packages = ["pixiu_backends"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
